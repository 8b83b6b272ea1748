"""Command line driver for sorting named batches of unsigned integers.

Sequences come from a JSON input file, from ``--sequence LABEL=1,2,3``
options, or from a built-in demo batch. Settings can be passed on the
command line or through a JSON configuration file.
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from sort_batch import sort_batch
from sort_logging import setup_logging

DEMO_SEQUENCES: dict[str, list[int]] = {
    "Test": [9, 2, 20, 15, 65, 32, 11, 100, 43, 5, 2, 18],
    "Test2": [92, 20, 18, 65, 32, 51, 100, 43, 5, 4, 18],
}

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class BatchConfig:
    """Settings that control one batch run."""

    workers: int = 1
    log_level: str = "INFO"
    log_file: Optional[str] = None
    stats: bool = False

    @classmethod
    def from_mapping(cls, mapping: dict[str, object]) -> "BatchConfig":
        return cls(
            workers=int(mapping.get("workers", 1)),
            log_level=str(mapping.get("log_level", "INFO")).upper(),
            log_file=_optional_str(mapping.get("log_file")),
            stats=_strict_bool(mapping.get("stats", False)),
        )


def _strict_bool(value: object) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"stats must be true or false, got {value!r}")
    return value


def _optional_str(value: Optional[object]) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def parse_values(raw: object) -> list[int]:
    """Validate a list of unsigned integers."""
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of integers, got {type(raw).__name__}")
    values = []
    for item in raw:
        # bool is an int subclass but never a valid element
        if isinstance(item, bool) or not isinstance(item, int):
            raise ValueError(f"not an integer: {item!r}")
        if item < 0:
            raise ValueError(f"not an unsigned integer: {item}")
        values.append(item)
    return values


def parse_sequence_option(text: str) -> tuple[str, list[int]]:
    """Parse ``LABEL=1,2,3`` into a label and its values."""
    label, sep, body = text.partition("=")
    label = label.strip()
    if not sep or not label:
        raise ValueError(f"expected LABEL=V1,V2,..., got {text!r}")
    try:
        raw = [int(part) for part in body.split(",") if part.strip()]
    except ValueError:
        raise ValueError(f"non-integer value in {text!r}") from None
    return label, parse_values(raw)


def load_sequences(mapping: object, source: str) -> dict[str, list[int]]:
    if not isinstance(mapping, dict):
        raise ValueError(f"{source}: expected a JSON object of label -> list")
    sequences = {}
    for label, raw in mapping.items():
        try:
            sequences[str(label)] = parse_values(raw)
        except ValueError as exc:
            raise ValueError(f"{source}: sequence {label!r}: {exc}") from None
    return sequences


def _read_json(parser: argparse.ArgumentParser, path_text: str, what: str) -> object:
    path = Path(path_text).expanduser()
    if not path.exists():
        parser.error(f"{what} file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        parser.error(f"Failed to parse JSON {what.lower()}: {exc}")


# CLI -------------------------------------------------------------------------------

def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quicksort each sequence of a named batch")
    parser.add_argument("--input", help="JSON file mapping labels to lists of unsigned integers")
    parser.add_argument(
        "--sequence",
        action="append",
        default=[],
        metavar="LABEL=V1,V2,...",
        help="Add a labelled sequence (repeatable)",
    )
    parser.add_argument("--workers", type=int, help="Number of sequences sorted concurrently (default: 1)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Logging level (default: INFO)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--stats", action="store_true", default=None, help="Report timing and counters per label")
    parser.add_argument("--config", help="Path to JSON configuration file with batch settings")

    args = parser.parse_args(argv)

    config = {}
    if args.config:
        config = _read_json(parser, args.config, "Config")
        if not isinstance(config, dict):
            parser.error("Config file must contain a JSON object")

    merged = {
        "workers": args.workers if args.workers is not None else config.get("workers", 1),
        "log_level": args.log_level or config.get("log_level", "INFO"),
        "log_file": args.log_file or config.get("log_file"),
        "stats": args.stats if args.stats is not None else config.get("stats", False),
    }
    try:
        args.batch_config = BatchConfig.from_mapping(merged)
    except (TypeError, ValueError) as exc:
        parser.error(f"Invalid configuration: {exc}")
    if args.batch_config.workers < 1:
        parser.error("--workers must be at least 1")
    if args.batch_config.log_level not in LOG_LEVELS:
        parser.error(f"Unknown log level: {args.batch_config.log_level}")

    sequences: dict[str, list[int]] = {}
    try:
        if "sequences" in config:
            sequences.update(load_sequences(config["sequences"], args.config))
        if args.input:
            sequences.update(load_sequences(_read_json(parser, args.input, "Input"), args.input))
        # --sequence wins over the same label from --input or the config file
        seen: set[str] = set()
        for text in args.sequence:
            label, values = parse_sequence_option(text)
            if label in seen:
                parser.error(f"Duplicate label: {label}")
            seen.add(label)
            sequences[label] = values
    except ValueError as exc:
        parser.error(str(exc))

    has_source = bool(args.input or args.sequence or "sequences" in config)
    args.sequences = sequences if has_source else dict(DEMO_SEQUENCES)
    return args


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    config: BatchConfig = args.batch_config

    logger = setup_logging(config.log_level, config.log_file)
    logger.info("Sorting %d sequence(s)", len(args.sequences))

    results = sort_batch(args.sequences, workers=config.workers)

    if config.stats:
        report = {label: result.as_dict() for label, result in results.items()}
    else:
        report = {label: result.values for label, result in results.items()}
    print(json.dumps(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
