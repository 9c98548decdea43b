"""An HTTP API for managing student records stored in SQLite."""

__version__ = "0.1.0"