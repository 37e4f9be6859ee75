"""Shared helpers: errors, HTTP client and logging."""
