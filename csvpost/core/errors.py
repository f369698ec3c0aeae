"""Custom exceptions used across csvpost."""


class CsvPostError(Exception):
    """Base error for the application."""


class ConfigError(CsvPostError):
    """Invalid command line input or settings."""


class TransportError(CsvPostError):
    """Raised when a request was sent but no response came back."""


class UploadError(CsvPostError):
    """Raised when an upload cannot be started."""
