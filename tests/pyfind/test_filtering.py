"""Tests for pyfind filtering functions."""

import argparse
import re

import pytest
from pyfind import (
    EntryKind,
    FileSystemEntry,
    build_config,
    compile_names,
    matches_type,
    matching_names,
    parse_types,
    process_patterns,
)
from pystream import ConfigurationError


@pytest.fixture
def entries():
    """One entry of each kind."""
    return {
        "file": FileSystemEntry("root/a.txt", "a.txt", EntryKind.FILE),
        "dir": FileSystemEntry("root/sub", "sub", EntryKind.DIRECTORY),
        "link": FileSystemEntry("root/link", "link", EntryKind.SYMLINK),
        "fifo": FileSystemEntry("root/pipe", "pipe", EntryKind.OTHER),
    }


class TestParseTypes:
    """Test parse_types function."""

    def test_short_and_long_names(self):
        assert parse_types(["f", "dir", "l"]) == frozenset(
            [EntryKind.FILE, EntryKind.DIRECTORY, EntryKind.SYMLINK]
        )

    def test_empty(self):
        assert parse_types([]) == frozenset()

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError, match='Invalid --type "x"'):
            parse_types(["x"])


class TestCompileNames:
    """Test compile_names function."""

    def test_compiles_patterns(self):
        names = compile_names([r"\.txt$", "^a"])
        assert [p.pattern for p in names] == [r"\.txt$", "^a"]

    def test_invalid_pattern(self):
        with pytest.raises(ConfigurationError, match='Invalid --name "\\["'):
            compile_names(["["])


class TestProcessPatterns:
    """Test process_patterns function."""

    def test_comma_separated(self):
        assert process_patterns(["f,d"]) == ["f", "d"]

    def test_empty_and_whitespace(self):
        assert process_patterns(["", " ", "l"]) == ["l"]


class TestMatchesType:
    """Test matches_type function."""

    def test_empty_filter_accepts_all(self, entries):
        assert all(matches_type(e, frozenset()) for e in entries.values())

    def test_files_only(self, entries):
        types = frozenset([EntryKind.FILE])
        kept = [name for name, e in entries.items() if matches_type(e, types)]
        assert kept == ["file"]

    def test_dirs_and_links(self, entries):
        types = frozenset([EntryKind.DIRECTORY, EntryKind.SYMLINK])
        kept = [name for name, e in entries.items() if matches_type(e, types)]
        assert kept == ["dir", "link"]


class TestMatchingNames:
    """Test matching_names function."""

    def test_no_patterns_keeps_once(self, entries):
        assert matching_names(entries["file"], []) == 1

    def test_pattern_searches_base_name(self, entries):
        # The directory part of the path must not match
        assert matching_names(entries["file"], [re.compile("root")]) == 0
        assert matching_names(entries["file"], [re.compile("txt")]) == 1

    def test_one_per_matching_pattern(self, entries):
        names = [re.compile("a"), re.compile(r"\.txt$"), re.compile("zzz")]
        assert matching_names(entries["file"], names) == 2


class TestBuildConfig:
    """Test build_config function."""

    def test_defaults(self):
        args = argparse.Namespace(paths=["."], name=[], type=[])
        config = build_config(args)
        assert config.paths == ["."]
        assert config.names == []
        assert config.types == frozenset()

    def test_invalid_name_is_configuration_error(self):
        args = argparse.Namespace(paths=["."], name=["*.txt"], type=[])
        with pytest.raises(ConfigurationError):
            build_config(args)

    def test_comma_separated_types(self):
        args = argparse.Namespace(paths=["."], name=[], type=["f,l"])
        assert build_config(args).types == frozenset(
            [EntryKind.FILE, EntryKind.SYMLINK]
        )
