"""Custom exceptions for the mapseq package."""

from typing import Optional


class MapSeqError(Exception):
    """Base exception for all mapseq errors."""

    pass


class StructuralError(MapSeqError):
    """Raised when the description document does not have the expected shape."""

    pass


class FieldParseError(MapSeqError):
    """Raised when a field of an image record cannot be parsed."""

    def __init__(self, index: int, field: str, reason: str) -> None:
        self.index = index
        self.field = field
        self.reason = reason
        super().__init__(f"Record {index}: cannot parse {field}: {reason}")


class ConfigurationError(MapSeqError):
    """Raised when configuration is invalid."""

    pass


class DescriptionFileError(MapSeqError):
    """Raised when the image description file cannot be read."""

    def __init__(self, message: str, path: Optional[object] = None) -> None:
        self.path = path
        super().__init__(message)
