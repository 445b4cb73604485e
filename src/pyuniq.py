#!/usr/bin/env python3
"""
pyuniq - collapse consecutive duplicate lines.

Reads one input (a file or standard input) and writes each run of adjacent
identical lines once, optionally prefixed with the number of lines in the
run, similar to 'uniq'. Lines are compared with their trailing line
terminator removed; no other whitespace is ignored.
"""

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pystream import STDIN, describe_error, format_count, open_source, setup_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicateGroup:
    """A run of equal adjacent lines.

    Attributes:
        line (str):
            The last line of the run, terminator included, so an
            unterminated final line stays unterminated.
        count (int):
            Number of lines in the run (at least 1).

    """

    line: str
    count: int


@dataclass(frozen=True)
class UniqConfig:
    in_file: str = STDIN
    out_file: str | None = None
    count: bool = False


def strip_terminator(line: str) -> str:
    """Remove one trailing "\\n" or "\\r\\n" terminator and nothing else."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def collapse(lines: Iterable[str]) -> Iterator[DuplicateGroup]:
    """
    Group consecutive equal lines.

    Args:
        lines (Iterable[str]):
            Lines in input order, terminators included.

    Yields:
        DuplicateGroup:
            One group per run, in input order, carrying the run's last
            line. A group is emitted when the next line differs or when the
            input ends.

    """
    current = None
    key = None
    count = 0
    for line in lines:
        line_key = strip_terminator(line)
        if current is not None and line_key == key:
            current = line
            count += 1
            continue
        if current is not None:
            yield DuplicateGroup(current, count)
        current, key, count = line, line_key, 1
    if current is not None:
        yield DuplicateGroup(current, count)


def format_group(group: DuplicateGroup, show_count: bool) -> str:
    if show_count:
        return f"{format_count(group.count)}{group.line}"
    return group.line


def write_groups(lines: Iterable[str], out, show_count: bool) -> int:
    """
    Collapse `lines` and write each group to `out`.

    Returns:
        int:
            The number of groups written.

    """
    written = 0
    for group in collapse(lines):
        out.write(format_group(group, show_count))
        written += 1
    return written


def run(config: UniqConfig) -> None:
    """
    Collapse the configured input into the configured output.

    Args:
        config (UniqConfig):
            The finished configuration.

    Raises:
        OSError: If the input cannot be opened or read, or the output cannot
            be written. The error names the failing target.

    """
    with open_source(config.in_file) as source:
        if config.out_file is None:
            written = write_groups(source.text_lines(), sys.stdout, config.count)
        else:
            with open(config.out_file, "w", encoding="utf-8", newline="") as out:
                written = write_groups(source.text_lines(), out, config.count)
    logger.debug(f"Wrote {written} group(s)")


def parse_args(argv=None):
    """Parse command-line arguments.

    Returns:
        argparse.Namespace:
            Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Collapse adjacent duplicate lines."
    )
    parser.add_argument(
        "in_file",
        nargs="?",
        default=STDIN,
        help="Input file (default: standard input)",
    )
    parser.add_argument(
        "out_file",
        nargs="?",
        default=None,
        help="Output file (default: standard output)",
    )
    parser.add_argument(
        "-c",
        "--count",
        action="store_true",
        help="Prefix lines with the number of occurrences",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args) -> UniqConfig:
    return UniqConfig(in_file=args.in_file, out_file=args.out_file, count=args.count)


def main():
    """Main entry point for the pyuniq collapser."""
    args = parse_args()
    setup_logging(args.debug)
    config = build_config(args)
    try:
        run(config)
    except OSError as e:
        logger.error(describe_error(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
