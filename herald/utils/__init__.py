"""Discord helpers for Herald."""
