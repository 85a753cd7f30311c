from collections.abc import Iterator
from pathlib import Path

from anonbattle.processor.exceptions import InputDirectoryError
from anonbattle.processor.models import BattleLogFile


def output_file_path(output_dir: Path, battle_format: str, battle_number: int) -> Path:
    """Build path to an anonymized log: {output_dir}/battle-{format}-{number}.log.json"""
    return output_dir / f"battle-{battle_format}-{battle_number}.log.json"


class BattleLogLoader:
    """Walks input directories and yields the battle logs of one format."""

    def __init__(self, battle_format: str) -> None:
        self._battle_format = battle_format

    @property
    def battle_format(self) -> str:
        return self._battle_format

    def iter_files(self, input_dir: Path) -> Iterator[BattleLogFile]:
        """Yield matching log files under *input_dir*, recursively, in name order.

        Raises:
            InputDirectoryError: if *input_dir* is missing or not a directory.
        """
        if not input_dir.is_dir():
            raise InputDirectoryError(f"Input directory not found: {input_dir}")
        yield from self._walk(input_dir)

    def read(self, log_file: BattleLogFile) -> str:
        return log_file.path.read_text(encoding="utf-8")

    def _walk(self, directory: Path) -> Iterator[BattleLogFile]:
        for path in sorted(directory.iterdir()):
            if path.is_dir():
                # Directories like "gen7ou" hold other formats
                if path.name.startswith("gen") and path.name != self._battle_format:
                    continue
                yield from self._walk(path)
            elif self._battle_format in str(path):
                yield BattleLogFile(path=path, battle_format=self._battle_format)
