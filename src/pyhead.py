#!/usr/bin/env python3
"""
pyhead - print the first lines or bytes of files.

Emits the first N lines (terminators included) or the first N raw bytes of
each input file, similar to 'head'. When more than one file is given each
file's output is preceded by a '==> name <==' header.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field

from pystream import (
    STDIN,
    ConfigurationError,
    InputSource,
    decode,
    describe_error,
    format_header,
    open_source,
    parse_positive_int,
    setup_logging,
)

logger = logging.getLogger(__name__)

DEFAULT_LINES = 10


@dataclass(frozen=True)
class BoundSpec:
    """Exactly one of a line limit or a byte limit.

    Attributes:
        lines (int | None):
            Number of lines to emit when bounding by lines.
        bytes (int | None):
            Number of raw bytes to emit when bounding by bytes.

    """

    lines: int | None = None
    bytes: int | None = None

    def __post_init__(self):
        if (self.lines is None) == (self.bytes is None):
            raise ConfigurationError("exactly one of a line or byte count is required")
        for value in (self.lines, self.bytes):
            if value is not None and value <= 0:
                raise ConfigurationError(f"illegal count -- {value}")

    @classmethod
    def from_options(cls, lines: str | None, bytes: str | None) -> "BoundSpec":
        """
        Build a bound from raw option values.

        Args:
            lines (str | None):
                The --lines value, or None when not given.
            bytes (str | None):
                The --bytes value, or None when not given.

        Returns:
            BoundSpec:
                A byte bound if --bytes was given, otherwise a line bound
                (10 lines by default).

        Raises:
            ConfigurationError: If both are given, or a value is not a
                positive integer.

        """
        if lines is not None and bytes is not None:
            raise ConfigurationError(
                "the argument --lines cannot be used with --bytes"
            )
        if bytes is not None:
            try:
                return cls(bytes=parse_positive_int(bytes))
            except ValueError as e:
                raise ConfigurationError(f"illegal byte count -- {e}") from None
        if lines is None:
            return cls(lines=DEFAULT_LINES)
        try:
            return cls(lines=parse_positive_int(lines))
        except ValueError as e:
            raise ConfigurationError(f"illegal line count -- {e}") from None


@dataclass(frozen=True)
class HeadConfig:
    files: list[str] = field(default_factory=lambda: [STDIN])
    bound: BoundSpec = field(default_factory=lambda: BoundSpec(lines=DEFAULT_LINES))


def extract(source: InputSource, bound: BoundSpec) -> str:
    """
    Read the bounded prefix of a source.

    Args:
        source (InputSource):
            The source to read from.
        bound (BoundSpec):
            The line or byte bound.

    Returns:
        str:
            Up to `bound.lines` complete line reads verbatim, or up to
            `bound.bytes` raw bytes decoded best-effort.

    """
    if bound.bytes is not None:
        return decode(source.read_bytes(bound.bytes))
    parts = []
    for _ in range(bound.lines):
        line = source.read_line()
        if not line:
            break
        parts.append(decode(line))
    return "".join(parts)


def run(config: HeadConfig, out=None) -> bool:
    """
    Print the bounded prefix of every configured file.

    Args:
        config (HeadConfig):
            The finished configuration.
        out (TextIO | None):
            Output sink (default: standard output).

    Returns:
        bool:
            True if every file was read, False if any failed.

    """
    out = out if out is not None else sys.stdout
    show_headers = len(config.files) > 1
    ok = True
    for index, filename in enumerate(config.files):
        try:
            with open_source(filename) as source:
                if show_headers:
                    out.write(format_header(filename, first=index == 0))
                out.write(extract(source, config.bound))
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
    parser = argparse.ArgumentParser(
        description="Print the first lines or bytes of each file."
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=[STDIN],
        help="Input file(s) (default: standard input)",
    )
    parser.add_argument(
        "-n",
        "--lines",
        type=str,
        default=None,
        help=f"Number of lines (default: {DEFAULT_LINES})",
    )
    parser.add_argument(
        "-c",
        "--bytes",
        type=str,
        default=None,
        help="Number of bytes (conflicts with --lines)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args) -> HeadConfig:
    return HeadConfig(
        files=list(args.files) or [STDIN],
        bound=BoundSpec.from_options(args.lines, args.bytes),
    )


def main():
    """Main entry point for the pyhead extractor."""
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
