#!/usr/bin/env python3
"""
pywc - line, word, byte and character counter.

Counts the lines, whitespace-delimited words, raw bytes and decoded characters
of each input file (or standard input), similar to 'wc'. When more than one
file is given a total line follows the per-file lines.
"""

import argparse
import logging
import re
import sys
from dataclasses import dataclass, field

from pystream import (
    STDIN,
    InputSource,
    decode,
    describe_error,
    format_field,
    open_source,
    setup_logging,
)

logger = logging.getLogger(__name__)

# Runs of non-whitespace; the \x1c-\x1f separators are not whitespace here
WORD_PATTERN = re.compile(r"(?:\S|[\x1c-\x1f])+")


@dataclass
class CountAccumulator:
    """Line, word, byte and character totals for one file or a grand total.

    Attributes:
        lines (int):
            Number of line reads, including a final unterminated fragment.
        words (int):
            Number of whitespace-delimited tokens.
        bytes (int):
            Number of raw bytes, terminators included.
        chars (int):
            Number of decoded characters; never greater than `bytes`.

    """

    lines: int = 0
    words: int = 0
    bytes: int = 0
    chars: int = 0

    def __iadd__(self, other: "CountAccumulator") -> "CountAccumulator":
        self.lines += other.lines
        self.words += other.words
        self.bytes += other.bytes
        self.chars += other.chars
        return self


@dataclass(frozen=True)
class WcConfig:
    """Which files to count and which fields to print."""

    files: list[str] = field(default_factory=lambda: [STDIN])
    lines: bool = True
    words: bool = True
    bytes: bool = True
    chars: bool = False

    @classmethod
    def from_flags(
        cls,
        files: list[str] | None = None,
        lines: bool = False,
        words: bool = False,
        bytes: bool = False,
        chars: bool = False,
    ) -> "WcConfig":
        """
        Derive the field selection from explicit flags.

        When no flag is given, lines, words and bytes are shown and characters
        are not.
        """
        if not any([lines, words, bytes, chars]):
            lines = words = bytes = True
        return cls(
            files=list(files) if files else [STDIN],
            lines=lines,
            words=words,
            bytes=bytes,
            chars=chars,
        )


def count(source: InputSource) -> CountAccumulator:
    """
    Count lines, words, bytes and characters until end of stream.

    Args:
        source (InputSource):
            The source to consume.

    Returns:
        CountAccumulator:
            The totals for this source.

    Raises:
        OSError: If reading fails.

    """
    info = CountAccumulator()
    for raw in source.lines():
        text = decode(raw)
        info.lines += 1
        info.words += len(WORD_PATTERN.findall(text))
        info.bytes += len(raw)
        info.chars += len(text)
    return info


def format_counts(info: CountAccumulator, config: WcConfig, name: str) -> str:
    """Render the enabled fields followed by the file name (none for stdin)."""
    fields = (
        format_field(info.lines, config.lines)
        + format_field(info.words, config.words)
        + format_field(info.bytes, config.bytes)
        + format_field(info.chars, config.chars)
    )
    suffix = "" if name == STDIN else f" {name}"
    return f"{fields}{suffix}"


def run(config: WcConfig, out=None) -> bool:
    """
    Count every configured file and print the results.

    Args:
        config (WcConfig):
            The finished configuration.
        out (TextIO | None):
            Output sink (default: standard output).

    Returns:
        bool:
            True if every file was counted, False if any failed.

    """
    out = out if out is not None else sys.stdout
    total = CountAccumulator()
    ok = True
    for filename in config.files:
        try:
            with open_source(filename) as source:
                info = count(source)
        except OSError as e:
            logger.error(describe_error(e, filename))
            ok = False
            continue
        print(format_counts(info, config, filename), file=out)
        total += info
    if len(config.files) > 1:
        print(format_counts(total, config, "total"), file=out)
    return ok


def parse_args(argv=None):
    """Parse command-line arguments.

    Returns:
        argparse.Namespace:
            Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Count lines, words, bytes and characters."
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=[STDIN],
        help="Input file(s) (default: standard input)",
    )
    parser.add_argument(
        "-l", "--lines", action="store_true", help="Show line count"
    )
    parser.add_argument(
        "-w", "--words", action="store_true", help="Show word count"
    )
    parser.add_argument(
        "-c", "--bytes", action="store_true", help="Show byte count"
    )
    parser.add_argument(
        "-m", "--chars", action="store_true", help="Show character count"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args) -> WcConfig:
    return WcConfig.from_flags(
        files=args.files,
        lines=args.lines,
        words=args.words,
        bytes=args.bytes,
        chars=args.chars,
    )


def main():
    """Main entry point for the pywc counter."""
    args = parse_args()
    setup_logging(args.debug)
    config = build_config(args)
    logger.debug(f"Counting {len(config.files)} file(s)")
    sys.exit(0 if run(config) else 1)


if __name__ == "__main__":
    main()
