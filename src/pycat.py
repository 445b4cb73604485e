#!/usr/bin/env python3
"""
pycat - concatenate and print files.

Prints each input file (or standard input) verbatim, optionally numbering
all lines or only non-blank ones, similar to 'cat'.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field

from pystream import (
    STDIN,
    ConfigurationError,
    InputSource,
    describe_error,
    format_numbered,
    open_source,
    setup_logging,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatConfig:
    """Files to print and the numbering mode.

    Attributes:
        files (list[str]):
            Inputs in print order ("-" for standard input).
        number_lines (bool):
            Number every line.
        number_nonblank_lines (bool):
            Number only non-blank lines; blank lines are printed bare.

    """

    files: list[str] = field(default_factory=lambda: [STDIN])
    number_lines: bool = False
    number_nonblank_lines: bool = False

    def __post_init__(self):
        if self.number_lines and self.number_nonblank_lines:
            raise ConfigurationError(
                "the argument --number cannot be used with --number-nonblank"
            )


def is_blank(line: str) -> bool:
    return not line.rstrip("\r\n")


def print_source(source: InputSource, config: CatConfig, out) -> None:
    """Write one source to `out`, numbering lines as configured."""
    number = 0
    for line in source.text_lines():
        if config.number_lines or (
            config.number_nonblank_lines and not is_blank(line)
        ):
            number += 1
            out.write(format_numbered(number, line))
        else:
            out.write(line)


def run(config: CatConfig, out=None) -> bool:
    """
    Print every configured file.

    Returns:
        bool:
            True if every file was printed, False if any failed.

    """
    out = out if out is not None else sys.stdout
    ok = True
    for filename in config.files:
        try:
            with open_source(filename) as source:
                print_source(source, config, out)
        except OSError as e:
            logger.error(describe_error(e, filename))
            ok = False
    return ok


def parse_args(argv=None):
    """Parse command-line arguments.

    Returns:
        argparse.Namespace:
            Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(description="Concatenate and print files.")
    parser.add_argument(
        "files",
        nargs="*",
        default=[STDIN],
        help="Input file(s) (default: standard input)",
    )
    parser.add_argument(
        "-n", "--number", action="store_true", help="Number all output lines"
    )
    parser.add_argument(
        "-b",
        "--number-nonblank",
        action="store_true",
        help="Number non-blank output lines",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args) -> CatConfig:
    return CatConfig(
        files=list(args.files) or [STDIN],
        number_lines=args.number,
        number_nonblank_lines=args.number_nonblank,
    )


def main():
    """Main entry point for the pycat printer."""
    args = parse_args()
    setup_logging(args.debug)
    try:
        config = build_config(args)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    sys.exit(0 if run(config) else 1)


if __name__ == "__main__":
    main()
