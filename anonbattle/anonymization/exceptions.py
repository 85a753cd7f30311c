class AnonymizationError(Exception):
    """Base exception for all anonymization-related errors."""


class ParseError(AnonymizationError):
    """Raised when a battle log is not valid JSON."""


class SchemaError(AnonymizationError):
    """Raised when a required battle log field is missing or has the wrong shape."""


class LeakDetectedError(AnonymizationError):
    """Raised in strict mode when player-identifying text survives anonymization."""

    def __init__(self, message: str, room_id: object = None) -> None:
        super().__init__(message)
        self.room_id = room_id
