"""Generates TypeScript row interfaces from a PostgreSQL schema."""

__version__ = "0.1.0"
