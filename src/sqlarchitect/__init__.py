"""SQL Architect: schema designer model and dialect-aware SQL generation."""

__version__ = "0.1.0"
