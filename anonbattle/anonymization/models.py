from dataclasses import dataclass


@dataclass(frozen=True)
class PlayerIdentity:
    """One side of a battle, as seen while anonymizing a single record."""

    name: str  # raw display name, e.g. "Annika"
    userid: str  # normalized form, e.g. "annika"
    pseudonym: str  # replacement written to the output, e.g. "1"

    @property
    def search_terms(self) -> tuple[str, ...]:
        """Non-empty spellings of the player that must not survive in output."""
        return tuple(term for term in (self.name, self.userid) if term)
