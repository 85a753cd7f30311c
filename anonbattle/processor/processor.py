from collections.abc import Iterable
from pathlib import Path

from anonbattle.anonymization.base import BaseAnonymizer
from anonbattle.anonymization.exceptions import ParseError, SchemaError
from anonbattle.anonymization.factory import AnonymizerFactory
from anonbattle.config.settings import Settings
from anonbattle.logging.logger import Log
from anonbattle.processor.exceptions import InputDirectoryError
from anonbattle.processor.file_loader import BattleLogLoader, output_file_path
from anonbattle.processor.models import BattleLogFile, ProcessorResult


class Processor:
    """Runs every battle log of one format through a shared anonymizer.

    Pipeline per file: read -> anonymize -> write.
    Malformed logs are skipped; a strict-mode leak aborts the whole run.
    """

    def __init__(
        self,
        anonymizer: BaseAnonymizer,
        loader: BattleLogLoader,
        output_dir: Path,
    ) -> None:
        self._anonymizer = anonymizer
        self._loader = loader
        self._output_dir = output_dir

    def run(self, input_dirs: Iterable[Path]) -> ProcessorResult:
        """Anonymize all matching logs under *input_dirs* into the output directory.

        Raises:
            LeakDetectedError: if the anonymizer is strict and a log leaks a name.
        """
        self._output_dir.mkdir(parents=True, exist_ok=True)
        result = ProcessorResult()

        for input_dir in input_dirs:
            Log.info(f"Anonymizing {input_dir}...")
            try:
                for log_file in self._loader.iter_files(input_dir):
                    self._process_file(log_file, result)
            except (InputDirectoryError, OSError) as exc:
                Log.error(f"Error with input {input_dir}: {exc}")

        Log.info(
            f"Wrote {len(result.written)} anonymized logs to {self._output_dir}, "
            f"skipped {len(result.skipped)}"
        )
        return result

    def _process_file(self, log_file: BattleLogFile, result: ProcessorResult) -> None:
        try:
            raw = self._loader.read(log_file)
            anonymized, battle_number = self._anonymizer.anonymize(raw)
        except (ParseError, SchemaError, UnicodeDecodeError) as exc:
            Log.warning(f"Skipping {log_file.path}: {exc}")
            result.skipped.append(log_file.path)
            return

        out_path = output_file_path(self._output_dir, log_file.battle_format, battle_number)
        out_path.write_text(anonymized, encoding="utf-8")
        result.written.append(out_path)
        result.last_battle_number = battle_number


def build_processor(
    settings: Settings,
    battle_format: str,
    output_dir: Path,
    strict: bool | None = None,
) -> Processor:
    """Build a Processor with a fresh anonymizer for one run."""
    anonymizer = AnonymizerFactory.create(settings, strict=strict)
    loader = BattleLogLoader(battle_format)
    return Processor(anonymizer=anonymizer, loader=loader, output_dir=output_dir)
