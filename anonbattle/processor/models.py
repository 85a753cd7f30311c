from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class BattleLogFile:
    """A raw battle log located on disk for a given format."""

    path: Path
    battle_format: str  # e.g. "gen8randombattle"


@dataclass
class ProcessorResult:
    """Summary of one anonymization run."""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    last_battle_number: int = 0
