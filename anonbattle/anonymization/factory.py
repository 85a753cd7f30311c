from anonbattle.anonymization.anonymizer import Anonymizer
from anonbattle.anonymization.base import BaseAnonymizer
from anonbattle.config.settings import Settings


class AnonymizerFactory:
    """Creates the configured anonymizer."""

    @classmethod
    def create(cls, settings: Settings, strict: bool | None = None) -> BaseAnonymizer:
        """Create an anonymizer with a fresh pseudonym registry.

        *strict* overrides ``settings.strict_mode`` when given.
        """
        strict_mode = settings.strict_mode if strict is None else strict
        return Anonymizer(strict_mode=strict_mode)
