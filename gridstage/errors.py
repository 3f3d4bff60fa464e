"""Domain-specific exceptions raised by gridstage runtime components."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Closed set of classified failure codes."""

    DOES_NOT_EXIST = "ERR_DOES_NOT_EXIST"
    NOT_A_FOLDER = "ERR_NOT_A_FOLDER"
    NOT_A_FILE = "ERR_NOT_A_FILE"
    NOT_WRITEABLE = "ERR_NOT_WRITEABLE"
    PATH_NOT_ABSOLUTE = "ERR_PATH_NOT_ABSOLUTE"
    BAD_EXIT_CODE = "ERR_BAD_EXIT_CODE"
    ACCESS_DENIED = "ERR_ACCESS_DENIED"
    MISSING_OPTION = "ERR_MISSING_OPTION"


class GridstageError(Exception):
    """Base exception for gridstage-specific runtime failures."""


class StagingError(GridstageError):
    """Classified failure carrying an error code and its context fields.

    Raised by validation, secrets and transfer collaborators. The dispatcher
    turns these into a user-facing message and exit status 1.
    """

    def __init__(
        self,
        error_code: ErrorCode | str,
        *,
        path: str | None = None,
        option: str | None = None,
        exit_code: int | None = None,
    ) -> None:
        self.error_code = error_code
        self.path = path
        self.option = option
        self.exit_code = exit_code
        super().__init__(str(self.as_record()))

    def as_record(self) -> dict[str, Any]:
        """Return the populated fields as a plain mapping."""
        code = self.error_code.value if isinstance(self.error_code, ErrorCode) else self.error_code
        record: dict[str, Any] = {"error_code": code}
        if self.path is not None:
            record["path"] = self.path
        if self.option is not None:
            record["option"] = self.option
        if self.exit_code is not None:
            record["exit-code"] = self.exit_code
        return record


class SecretsServiceError(GridstageError):
    """Raised when the secrets service returns an unusable response."""
