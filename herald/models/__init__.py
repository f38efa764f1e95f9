"""Message models and configuration for Herald."""
