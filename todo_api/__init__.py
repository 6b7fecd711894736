"""JSON HTTP API for managing to-do items stored in SQLite."""

__version__ = "0.1.0"