"""A JSON web API over SQLite for a library's users, books, loans and returns."""

__version__ = "0.1.0"