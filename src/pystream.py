"""
pystream - shared streaming I/O support for the pytextutils tools.

Provides the input source abstraction (standard input or a named file read as
lines or raw bytes), the output formatting helpers, the error taxonomy, and
the coloured logging setup used by pycat, pywc, pyhead, pyuniq and pyfind.
"""

import logging
import sys

logger = logging.getLogger(__name__)

STDIN = "-"
ENCODING = "utf-8"


class ConfigurationError(ValueError):
    """Raised when command-line options are invalid or conflict."""


class TraversalError(OSError):
    """
    A single filesystem entry could not be inspected.

    Attributes:
        path (str):
            The path of the entry that failed.
        cause (OSError):
            The underlying operating system error.

    """

    def __init__(self, path: str, cause: OSError):
        super().__init__(cause.errno, cause.strerror, path)
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.path}: {self.cause.strerror or self.cause}"


class ColorFormatter(logging.Formatter):
    """
    Custom logging formatter that adds ANSI color codes to log messages.

    This formatter applies color coding based on log levels for better
    readability in terminal output.
    """

    COLORS = {
        logging.INFO: "\033[32m",  # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
        logging.CRITICAL: "\033[41m",  # Red background
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record with colors.

        Args:
            record (logging.LogRecord):
                The log record to format.

        Returns:
            str:
                The formatted log message with ANSI color codes.

        """
        color = self.COLORS.get(record.levelno, "")
        message = super().format(record)
        if color:
            message = f"{color}{message}{self.RESET}"
        return message


def setup_logging(debug: bool = False) -> None:
    """
    Attach a coloured stderr handler to the root logger.

    Args:
        debug (bool):
            Whether to log at DEBUG level instead of INFO.

    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter("%(levelname)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)


class InputSource:
    """
    A readable byte stream presented as lines or raw byte chunks.

    Attributes:
        name (str):
            The target this source was opened from ("-" for standard input).

    """

    def __init__(self, name: str, stream):
        self.name = name
        self._stream = stream

    def read_line(self) -> bytes:
        """Read up to and including the next newline, or b"" at end of stream."""
        return self._stream.readline()

    def read_bytes(self, size: int) -> bytes:
        """Read at most `size` raw bytes."""
        return self._stream.read(size)

    def lines(self):
        """Yield raw line reads until end of stream."""
        while True:
            line = self.read_line()
            if not line:
                return
            yield line

    def text_lines(self):
        """Yield leniently decoded line reads until end of stream."""
        for line in self.lines():
            yield decode(line)

    def close(self) -> None:
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class StdinSource(InputSource):
    """Standard input; closing it leaves the process stream open."""

    def __init__(self):
        super().__init__(STDIN, sys.stdin.buffer)

    def close(self) -> None:
        pass


class FileSource(InputSource):
    """A named file opened for binary reading."""

    def __init__(self, path: str):
        super().__init__(path, open(path, "rb"))


def open_source(target: str) -> InputSource:
    """
    Open standard input or a named file.

    Args:
        target (str):
            "-" for standard input, otherwise a filesystem path.

    Returns:
        InputSource:
            The opened source.

    Raises:
        OSError: If the file cannot be opened; `filename` is the target.

    """
    if target == STDIN:
        return StdinSource()
    logger.debug(f"Opening {target}")
    return FileSource(target)


def decode(data: bytes) -> str:
    """Decode UTF-8, replacing invalid sequences instead of failing."""
    return data.decode(ENCODING, errors="replace")


def parse_positive_int(value: str) -> int:
    """
    Parse a strictly positive integer.

    Args:
        value (str):
            The raw option value.

    Returns:
        int:
            The parsed value.

    Raises:
        ValueError: If the value is not a number or not greater than zero. The
            message is the offending value itself.

    Examples:
        >>> parse_positive_int('3')
        3

    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(str(value)) from None
    if number <= 0:
        raise ValueError(str(value))
    return number


def describe_error(exc: OSError, target: str | None = None) -> str:
    """Render an I/O error as "<target>: <reason>"."""
    name = target if target is not None else exc.filename
    reason = exc.strerror or str(exc)
    return f"{name}: {reason}" if name is not None else reason


# -- Output Formatting --
def format_field(value: int, show: bool) -> str:
    """Right-justify a count to width 8, or suppress it entirely."""
    return f"{value:>8}" if show else ""


def format_count(count: int) -> str:
    """Occurrence count prefix: width 4 followed by a single space."""
    return f"{count:>4} "


def format_header(name: str, first: bool) -> str:
    """File header for multi-file output, blank-separated after the first."""
    separator = "" if first else "\n"
    return f"{separator}==> {name} <==\n"


def format_numbered(number: int, line: str) -> str:
    """Line number right-justified to width 6, a tab, then the line."""
    return f"{number:>6}\t{line}"
