"""Dispatch services for Herald."""
