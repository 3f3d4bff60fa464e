"""CLI presentation helpers: diagnostics, banners and error messages."""

from __future__ import annotations

from typing import Any, Sequence

import click

from gridstage.errors import ErrorCode, StagingError

PREFIX = "[gridstage]"


def err_msg(err: StagingError) -> str:
    """Translate a classified failure into a human-readable message.

    Never raises: codes outside the known set fall back to the raw record.
    """
    code = err.error_code
    if code == ErrorCode.DOES_NOT_EXIST:
        return f"Path does not exist: {err.path}"
    if code == ErrorCode.NOT_A_FOLDER:
        return f"Path is not a folder: {err.path}"
    if code == ErrorCode.NOT_A_FILE:
        return f"Path is not a file: {err.path}"
    if code == ErrorCode.NOT_WRITEABLE:
        return f"Client needs write permission on: {err.path}"
    if code == ErrorCode.PATH_NOT_ABSOLUTE:
        return f"Path is not absolute: {err.path}"
    if code == ErrorCode.BAD_EXIT_CODE:
        return f"Command exited with status: {err.exit_code}"
    if code == ErrorCode.ACCESS_DENIED:
        return "You can't run this."
    if code == ErrorCode.MISSING_OPTION:
        return f"Missing required option: {err.option}"
    return f"Error: {err.as_record()}"


def format_unexpected(exc: BaseException) -> str:
    """Render an unclassified failure on a single line."""
    return f"Unexpected error: {type(exc).__name__}: {exc}"


def emit_diagnostics(
    args: Sequence[str],
    cmd: str,
    options: Any,
    remnants: Sequence[str],
) -> None:
    """Echo the parsed invocation before dispatch."""
    click.echo(f"{PREFIX} [arguments] {list(args)}")
    click.echo(f"{PREFIX} [command] '{cmd}'")
    click.echo(f"{PREFIX} [options] {options}")
    click.echo(f"{PREFIX} [remnants] {list(remnants)}")
