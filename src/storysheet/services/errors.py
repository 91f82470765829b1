"""Service-layer exceptions."""


class SaveLoadError(Exception):
    """Raised when save or load operations fail."""
