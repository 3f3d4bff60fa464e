"""Pre-flight checks run before any transfer is attempted."""

from __future__ import annotations

import os
from typing import Collection, Optional

from gridstage.config import DENIED_USERS
from gridstage.domain.options import GetOptions, PutOptions
from gridstage.errors import ErrorCode, StagingError


def exists(path: str) -> bool:
    return os.path.exists(path)


def is_file(path: str) -> bool:
    return os.path.isfile(path)


def is_folder(path: str) -> bool:
    return os.path.isdir(path)


def is_writeable(path: str) -> bool:
    return os.access(path, os.W_OK)


def is_absolute(path: str) -> bool:
    """Return whether a grid path is absolute. Grid paths are always POSIX."""
    return path.startswith("/")


def _require_option(value: Optional[str], option: str) -> str:
    if not value:
        raise StagingError(ErrorCode.MISSING_OPTION, option=option)
    return value


def _check_user(user: Optional[str], denied_users: Collection[str]) -> None:
    user = _require_option(user, "--user")
    if user in denied_users:
        raise StagingError(ErrorCode.ACCESS_DENIED)


def _check_local_file(path: str) -> None:
    if not exists(path):
        raise StagingError(ErrorCode.DOES_NOT_EXIST, path=path)
    if not is_file(path):
        raise StagingError(ErrorCode.NOT_A_FILE, path=path)


def _check_local_folder(path: str, *, writeable: bool = False) -> None:
    if not exists(path):
        raise StagingError(ErrorCode.DOES_NOT_EXIST, path=path)
    if not is_folder(path):
        raise StagingError(ErrorCode.NOT_A_FOLDER, path=path)
    if writeable and not is_writeable(path):
        raise StagingError(ErrorCode.NOT_WRITEABLE, path=path)


def _check_grid_path(path: str) -> None:
    if not is_absolute(path):
        raise StagingError(ErrorCode.PATH_NOT_ABSOLUTE, path=path)


def validate_get(options: GetOptions, denied_users: Collection[str] = DENIED_USERS) -> None:
    """
    Check that a download can be attempted.

    Raises:
        StagingError: On the first failed check.
    """
    _check_user(options.user, denied_users)
    if not (options.source or options.source_list):
        raise StagingError(ErrorCode.MISSING_OPTION, option="--source")
    if options.source:
        _check_grid_path(options.source)
    if options.source_list:
        _check_local_file(options.source_list)
    _check_local_folder(options.destination, writeable=True)


def validate_put(options: PutOptions, denied_users: Collection[str] = DENIED_USERS) -> None:
    """
    Check that an upload can be attempted.

    Raises:
        StagingError: On the first failed check.
    """
    _check_user(options.user, denied_users)
    _check_grid_path(_require_option(options.destination, "--destination"))
    _check_local_folder(options.source)
    if options.exclude:
        _check_local_file(options.exclude)
