"""Tests for per-verb flag parsing."""

from __future__ import annotations

import click
import pytest

from gridstage.cli import settings
from gridstage.domain.options import GetOptions, PutOptions


def test_fold_meta_keeps_order_duplicates_and_empty_units() -> None:
    """Verify repeated metadata groups are folded in order of appearance."""
    folded = settings.fold_meta(["a,1,cm", "b,2,", "a,1,cm"])

    assert folded == (("a", "1", "cm"), ("b", "2", ""), ("a", "1", "cm"))


def test_fold_meta_of_nothing_is_empty() -> None:
    """Verify no ``--meta`` flags yields an empty sequence."""
    assert settings.fold_meta([]) == ()


def test_get_settings_defaults() -> None:
    """Verify get defaults match the documented flag set."""
    options, remnants, banner = settings.get_settings(["-u", "alice"])

    assert isinstance(options, GetOptions)
    assert options.user == "alice"
    assert options.destination == "."
    assert options.source is None
    assert options.source_list is None
    assert options.debug_config is None
    assert options.meta == ()
    assert options.help is False
    assert remnants == ()
    assert "--source-list" in banner


def test_get_settings_collects_meta_and_remnants() -> None:
    """Verify repeated --meta values accumulate and positionals become remnants."""
    options, remnants, _banner = settings.get_settings(
        ["--meta", "a,1,cm", "-s", "/zone/a", "--meta", "b,2,", "left", "over"]
    )

    assert options.meta == (("a", "1", "cm"), ("b", "2", ""))
    assert options.source == "/zone/a"
    assert remnants == ("left", "over")


def test_get_settings_reads_all_short_flags() -> None:
    """Verify each get short flag maps to its option field."""
    options, _remnants, _banner = settings.get_settings(
        ["-u", "bob", "-z", "cfg.yaml", "-l", "paths.txt", "-d", "/tmp/in", "-h"]
    )

    assert options.user == "bob"
    assert options.debug_config == "cfg.yaml"
    assert options.source_list == "paths.txt"
    assert options.destination == "/tmp/in"
    assert options.help is True


def test_put_settings_defaults() -> None:
    """Verify put defaults match the documented flag set."""
    options, remnants, banner = settings.put_settings(["-d", "/zone/out"])

    assert isinstance(options, PutOptions)
    assert options.destination == "/zone/out"
    assert options.source == "."
    assert options.exclude == ""
    assert options.exclude_delimiter == "\n"
    assert options.include == ""
    assert options.include_delimiter == ","
    assert options.skip_parent_meta is False
    assert remnants == ()
    assert "--skip-parent-meta" in banner


def test_put_settings_reads_all_short_flags() -> None:
    """Verify each put short flag maps to its option field."""
    options, _remnants, _banner = settings.put_settings(
        [
            "-u", "carol",
            "-e", "exclude.txt",
            "-x", ";",
            "-i", "a.txt|b.txt",
            "-n", "|",
            "-s", "out",
            "-d", "/zone/out",
            "-m", "k,v,u",
            "-p",
        ]
    )

    assert options.user == "carol"
    assert options.exclude == "exclude.txt"
    assert options.exclude_delimiter == ";"
    assert options.include == "a.txt|b.txt"
    assert options.include_delimiter == "|"
    assert options.source == "out"
    assert options.meta == (("k", "v", "u"),)
    assert options.skip_parent_meta is True


def test_get_settings_rejects_put_only_flags() -> None:
    """Verify flags from the other verb's schema are rejected."""
    with pytest.raises(click.ClickException):
        settings.get_settings(["--skip-parent-meta"])


def test_put_settings_rejects_unknown_flag() -> None:
    """Verify unknown flags raise a click usage error."""
    with pytest.raises(click.ClickException):
        settings.put_settings(["--bogus"])


def test_settings_reject_missing_flag_value() -> None:
    """Verify a flag without its value raises a click usage error."""
    with pytest.raises(click.ClickException):
        settings.get_settings(["--source"])
