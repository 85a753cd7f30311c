from abc import ABC, abstractmethod


class BaseAnonymizer(ABC):
    """Contract for all battle log anonymizers."""

    @abstractmethod
    def anonymize(self, raw: str) -> tuple[str, int]:
        """Anonymize one battle log.

        Args:
            raw: Battle log JSON text as written by the game server.

        Returns:
            (anonymized_json, battle_number) where battle_number counts the
            logs successfully anonymized by this instance, starting at 1.

        Raises:
            ParseError: if *raw* is not valid JSON.
            SchemaError: if a required field is missing or malformed.
            LeakDetectedError: in strict mode, if identifying text survives.
            AnonymizationError: on any other failure.
        """
