from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from .commands import compare as cmd_compare
from .commands import dedupe as cmd_dedupe
from .commands import normalize as cmd_normalize
from .config import load_settings
from .core.identity import InvalidInputError

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    # Logs go to stderr; stdout may carry the rendered plan.
    handler = logging.StreamHandler(sys.stderr)
    if sys.stderr.isatty():
        handler.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prof-dedupe",
        description="Plan professor merges and name fixes for human review",
    )
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    dedupe_parser = subparsers.add_parser(
        "dedupe", help="Merge duplicate professors within one export"
    )
    dedupe_parser.add_argument(
        "records", type=Path, help='JSON array of {"id", "name"} records'
    )

    normalize_parser = subparsers.add_parser(
        "normalize", help="Fix professor names against the official roster"
    )
    normalize_parser.add_argument(
        "records", type=Path, help='JSON array of {"id", "name"} records'
    )
    normalize_parser.add_argument(
        "roster", type=Path, help="JSON array of names or teacher objects"
    )

    for sub in (dedupe_parser, normalize_parser):
        sub.add_argument(
            "--out", type=Path, default=None, help="Write the plan here instead of stdout"
        )
        sub.add_argument(
            "--format",
            choices=("sql", "json"),
            default=None,
            help="Plan format (defaults to output.format from config)",
        )

    compare_parser = subparsers.add_parser(
        "compare", help="Show how two names are classified"
    )
    compare_parser.add_argument("name_a")
    compare_parser.add_argument("name_b")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(args.config)
        match args.command:
            case "dedupe":
                cmd_dedupe.run(settings, args.records, out=args.out, fmt=args.format)
            case "normalize":
                cmd_normalize.run(
                    settings, args.records, args.roster, out=args.out, fmt=args.format
                )
            case "compare":
                cmd_compare.run(settings, args.name_a, args.name_b)
            case _:
                parser.error("Unknown command")
    except (InvalidInputError, FileNotFoundError, ValidationError, yaml.YAMLError) as exc:
        logger.error("%s", exc)
        return 1
    finally:
        if warn_buffer.records:
            print("\nWarnings/Errors summary:", file=sys.stderr)
            for line in warn_buffer.records:
                print(f" - {line}", file=sys.stderr)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
