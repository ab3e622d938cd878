"""Shared helpers: geometry math, file I/O."""
