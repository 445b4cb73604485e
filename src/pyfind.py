#!/usr/bin/env python3
"""
pyfind - recursive file finder.

Walks one or more directory trees depth-first and prints every entry whose
type and base name pass the given filters, similar to 'find'. Name filters are
regular expressions searched in the base name; type filters select regular
files, directories or symbolic links. Output is sorted by path.
"""

import argparse
import logging
import os
import re
import stat
import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from pystream import ConfigurationError, TraversalError, setup_logging

logger = logging.getLogger(__name__)


class EntryKind(Enum):
    """Enumeration of filesystem entry kinds."""

    FILE = "file"
    DIRECTORY = "dir"
    SYMLINK = "link"
    OTHER = "other"


TYPE_ALIASES = {
    "f": EntryKind.FILE,
    "file": EntryKind.FILE,
    "d": EntryKind.DIRECTORY,
    "dir": EntryKind.DIRECTORY,
    "l": EntryKind.SYMLINK,
    "link": EntryKind.SYMLINK,
}


@dataclass(frozen=True)
class FileSystemEntry:
    """An entry produced by the walk.

    Attributes:
        path (str):
            The path as reached from its root.
        name (str):
            The base name matched by name filters.
        kind (EntryKind):
            FILE, DIRECTORY, SYMLINK or OTHER; symbolic links are never
            followed.

    """

    path: str
    name: str
    kind: EntryKind


@dataclass(frozen=True)
class FindConfig:
    paths: list[str] = field(default_factory=lambda: ["."])
    names: list[re.Pattern] = field(default_factory=list)
    types: frozenset = frozenset()


def kind_from_mode(mode: int) -> EntryKind:
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def entry_name(path: str) -> str:
    """Base name of a path; a root like '.' or '/' is its own name."""
    return os.path.basename(os.path.normpath(path)) or path


def report_traversal_error(error: TraversalError) -> None:
    logger.error(str(error))


def list_children(
    path: str, on_error: Callable[[TraversalError], None]
) -> list[FileSystemEntry]:
    """Entries directly inside `path` in listing order, classified by lstat."""
    children = []
    try:
        with os.scandir(path) as it:
            for child in it:
                try:
                    mode = child.stat(follow_symlinks=False).st_mode
                except OSError as e:
                    on_error(TraversalError(child.path, e))
                    continue
                children.append(
                    FileSystemEntry(
                        os.path.join(path, child.name),
                        child.name,
                        kind_from_mode(mode),
                    )
                )
    except OSError as e:
        on_error(TraversalError(path, e))
    return children


def walk_entries(
    roots: Iterable[str],
    on_error: Callable[[TraversalError], None] = report_traversal_error,
) -> Iterator[FileSystemEntry]:
    """
    Yield every root and all of its descendants, depth-first.

    Children are visited in the order the directory listing returns them.
    Symbolic links below a root are reported as links and never descended
    into; a root that links to a directory is reported as a link and its
    target is searched.

    Args:
        roots (Iterable[str]):
            Paths to start from, visited in order.
        on_error (Callable[[TraversalError], None]):
            Called for each entry that cannot be inspected; the entry is
            skipped and the walk continues.

    Yields:
        FileSystemEntry:
            The entries in visiting order.

    """
    for root in roots:
        try:
            mode = os.lstat(root).st_mode
        except OSError as e:
            on_error(TraversalError(root, e))
            continue
        yield FileSystemEntry(root, entry_name(root), kind_from_mode(mode))
        # A root that is a link to a directory is still searched
        if not os.path.isdir(root):
            continue
        stack = list(reversed(list_children(root, on_error)))
        while stack:
            entry = stack.pop()
            yield entry
            if entry.kind == EntryKind.DIRECTORY:
                # Reversed so the first listed child is popped first
                stack.extend(reversed(list_children(entry.path, on_error)))


def parse_types(values: Iterable[str]) -> frozenset:
    """
    Convert type option values into a set of entry kinds.

    Raises:
        ConfigurationError: If a value is not one of f, d, l, file, dir, link.

    """
    kinds = set()
    for value in values:
        try:
            kinds.add(TYPE_ALIASES[value])
        except KeyError:
            raise ConfigurationError(f'Invalid --type "{value}"') from None
    return frozenset(kinds)


def compile_names(patterns: Iterable[str]) -> list[re.Pattern]:
    """
    Compile name patterns as regular expressions.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression.

    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error:
            raise ConfigurationError(f'Invalid --name "{pattern}"') from None
    return compiled


def process_patterns(values: Iterable[str]) -> list[str]:
    """Split comma-separated option values and drop empty items."""
    processed = []
    for value in values:
        processed.extend(value.split(","))
    return [item.strip() for item in processed if item.strip()]


def matches_type(entry: FileSystemEntry, types: frozenset) -> bool:
    """An empty type filter accepts every kind."""
    return not types or entry.kind in types


def matching_names(entry: FileSystemEntry, names: list[re.Pattern]) -> int:
    """
    Number of times the entry is retained by the name filter.

    Returns:
        int:
            1 when there are no name patterns, otherwise the number of
            patterns found in the entry's base name.

    """
    if not names:
        return 1
    return sum(1 for pattern in names if pattern.search(entry.name))


def walk(
    roots: Iterable[str],
    types: frozenset = frozenset(),
    names: list[re.Pattern] | None = None,
    on_error: Callable[[TraversalError], None] = report_traversal_error,
) -> list[str]:
    """
    Find the paths under `roots` that pass the type and name filters.

    Args:
        roots (Iterable[str]):
            Paths to search.
        types (frozenset):
            Accepted entry kinds (empty for all).
        names (list[re.Pattern] | None):
            Name patterns (empty or None for no name filter).
        on_error (Callable[[TraversalError], None]):
            Traversal error callback.

    Returns:
        list[str]:
            Matching paths sorted by path string. An entry matched by several
            name patterns appears once per pattern.

    """
    names = names or []
    output = []
    for entry in walk_entries(roots, on_error):
        if not matches_type(entry, types):
            continue
        output.extend([entry.path] * matching_names(entry, names))
    output.sort()
    return output


def run(config: FindConfig, out=None) -> bool:
    """
    Print every matching path, one per line.

    Returns:
        bool:
            True if the walk had no traversal errors.

    """
    out = out if out is not None else sys.stdout
    errors = []

    def on_error(error: TraversalError) -> None:
        errors.append(error)
        report_traversal_error(error)

    for path in walk(config.paths, config.types, config.names, on_error):
        print(path, file=out)
    return not errors


def parse_args(argv=None):
    """Parse command-line arguments.

    Returns:
        argparse.Namespace:
            Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Find filesystem entries by type and name."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Search paths (default: current directory)",
    )
    parser.add_argument(
        "-n",
        "--name",
        action="append",
        default=[],
        help="Regular expression matched against base names (can be used multiple times)",
    )
    parser.add_argument(
        "-t",
        "--type",
        action="append",
        default=[],
        help="Entry type: f|file, d|dir, l|link (can be used multiple times or comma-separated)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args) -> FindConfig:
    return FindConfig(
        paths=list(args.paths) or ["."],
        names=compile_names(args.name),
        types=parse_types(process_patterns(args.type)),
    )


def main():
    """Main entry point for the pyfind finder."""
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
