"""Shared helpers: logging, error handling, input validation."""
