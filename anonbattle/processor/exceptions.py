class ProcessorError(Exception):
    """Base exception for all batch processing errors."""


class InputDirectoryError(ProcessorError):
    """Raised when an input path does not exist or is not a directory."""
