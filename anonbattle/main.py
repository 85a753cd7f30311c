import argparse
from pathlib import Path

from anonbattle.anonymization.exceptions import LeakDetectedError
from anonbattle.config.settings import Settings
from anonbattle.logging.logger import Log
from anonbattle.processor.processor import build_processor


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="anonbattle",
        description="Anonymize battle logs for publication.",
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        action="append",
        type=Path,
        required=True,
        help="Directory of raw battle logs (repeatable).",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_dir",
        type=Path,
        required=True,
        help="Directory for anonymized logs; created if missing.",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="battle_format",
        required=True,
        help="Battle format to anonymize, e.g. gen8randombattle.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort the run if any player name survives anonymization.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> load settings -> build processor -> run."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    processor = build_processor(
        settings,
        battle_format=args.battle_format,
        output_dir=args.output_dir,
        strict=True if args.strict else None,
    )
    try:
        result = processor.run(args.inputs)
    except LeakDetectedError as exc:
        Log.error(f"Aborting run: {exc}")
        return 1

    Log.info(f"Done: {result.last_battle_number} battles anonymized")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
