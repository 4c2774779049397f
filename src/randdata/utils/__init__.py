"""Shared helpers: error types, byte counts and logging."""
