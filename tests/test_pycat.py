"""Tests for pycat module."""

import argparse
import io
import logging

import pytest
from pycat import CatConfig, build_config, run
from pystream import ConfigurationError


@pytest.fixture
def spiders(tmp_path):
    path = tmp_path / "spiders.txt"
    path.write_bytes(b"Don't worry, spiders,\n\nI keep house\ncasually.\n")
    return str(path)


class TestCatConfig:
    """Test CatConfig validation."""

    def test_numbering_flags_conflict(self):
        with pytest.raises(ConfigurationError):
            CatConfig(number_lines=True, number_nonblank_lines=True)

    def test_build_config_defaults_to_stdin(self):
        args = argparse.Namespace(files=[], number=False, number_nonblank=False)
        assert build_config(args).files == ["-"]


class TestRun:
    """Test run function."""

    def test_plain(self, spiders):
        out = io.StringIO()
        assert run(CatConfig(files=[spiders]), out) is True
        assert out.getvalue() == "Don't worry, spiders,\n\nI keep house\ncasually.\n"

    def test_number_lines(self, spiders):
        out = io.StringIO()
        run(CatConfig(files=[spiders], number_lines=True), out)
        assert out.getvalue() == (
            "     1\tDon't worry, spiders,\n"
            "     2\t\n"
            "     3\tI keep house\n"
            "     4\tcasually.\n"
        )

    def test_number_nonblank_lines(self, spiders):
        out = io.StringIO()
        run(CatConfig(files=[spiders], number_nonblank_lines=True), out)
        assert out.getvalue() == (
            "     1\tDon't worry, spiders,\n"
            "\n"
            "     2\tI keep house\n"
            "     3\tcasually.\n"
        )

    def test_numbering_restarts_per_file(self, spiders):
        out = io.StringIO()
        run(CatConfig(files=[spiders, spiders], number_lines=True), out)
        numbers = [line.split("\t")[0].strip() for line in out.getvalue().splitlines()]
        assert numbers == ["1", "2", "3", "4", "1", "2", "3", "4"]

    def test_missing_file_reported_and_skipped(self, spiders, tmp_path, caplog):
        missing = str(tmp_path / "missing.txt")
        out = io.StringIO()
        with caplog.at_level(logging.ERROR):
            ok = run(CatConfig(files=[missing, spiders]), out)
        assert ok is False
        assert f"{missing}: No such file or directory" in caplog.text
        assert out.getvalue().startswith("Don't worry")
