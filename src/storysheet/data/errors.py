"""Custom exceptions for sheet loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when sheet files are missing or unreadable."""


class SchemaError(DataError):
    """Raised when sheet content cannot be mapped to a playable game."""
