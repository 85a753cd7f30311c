class PseudonymRegistry:
    """Maps player display names to sequential pseudonyms for one run.

    The mapping is append-only: a name keeps its pseudonym for the lifetime
    of the registry, and pseudonyms are never handed out twice. Not safe for
    concurrent mutation.
    """

    def __init__(self) -> None:
        self._players: dict[str, str] = {}
        self._counter = 0

    def assign_or_get(self, name: str) -> str:
        """Return the pseudonym for *name*, assigning the next number on first sight."""
        pseudonym = self._players.get(name)
        if pseudonym is None:
            self._counter += 1
            pseudonym = str(self._counter)
            self._players[name] = pseudonym
        return pseudonym

    def get(self, name: str) -> str | None:
        return self._players.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._players

    def __len__(self) -> int:
        return len(self._players)
