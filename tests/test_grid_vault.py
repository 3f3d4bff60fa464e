"""Tests for the secrets-service client."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
import requests

from gridstage.errors import ErrorCode, SecretsServiceError, StagingError
from gridstage.grid.vault import VaultClient


class DummySession:
    """HTTP session test double collecting outgoing requests."""

    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.calls: list[tuple[str, dict[str, str] | None, Any]] = []

    def _raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def _json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: Any = None,
    ) -> SimpleNamespace:
        self.calls.append((url, headers, timeout))
        return SimpleNamespace(
            status_code=self.status_code,
            raise_for_status=self._raise_for_status,
            json=self._json,
        )


def test_irods_config_reads_job_secret() -> None:
    """Verify the job secret URL, token header and config value."""
    session = DummySession(payload={"data": {"config": "host: grid\n"}})
    client = VaultClient(session=session, mount="/cubbyhole/", timeout=(1.0, 2.0))

    config = client.irods_config("https://vault.example/", "s.tok", "job-7")

    assert config == b"host: grid\n"
    assert session.calls == [
        ("https://vault.example/v1/cubbyhole/job-7", {"X-Vault-Token": "s.tok"}, (1.0, 2.0))
    ]


def test_irods_config_serializes_mapping_secrets() -> None:
    """Verify structured config values are returned as JSON bytes."""
    session = DummySession(payload={"data": {"config": {"port": 1247, "host": "grid"}}})

    config = VaultClient(session=session).irods_config("https://v", "t", "j")

    assert config == b'{"host": "grid", "port": 1247}'


@pytest.mark.parametrize(
    ("addr", "token", "job_uuid", "option"),
    [
        (None, "t", "j", "VAULT_ADDR"),
        ("https://v", "", "j", "VAULT_TOKEN"),
        ("https://v", "t", None, "JOB_UUID"),
    ],
)
def test_irods_config_requires_credentials(addr: Any, token: Any, job_uuid: Any, option: str) -> None:
    """Verify missing credentials are classified and no request is sent."""
    session = DummySession(payload={"data": {"config": "x"}})

    with pytest.raises(StagingError) as exc_info:
        VaultClient(session=session).irods_config(addr, token, job_uuid)

    assert exc_info.value.error_code == ErrorCode.MISSING_OPTION
    assert exc_info.value.option == option
    assert session.calls == []


def test_irods_config_maps_forbidden_to_access_denied() -> None:
    """Verify a rejected token is classified as denied access."""
    session = DummySession(status_code=403)

    with pytest.raises(StagingError) as exc_info:
        VaultClient(session=session).irods_config("https://v", "t", "j")

    assert exc_info.value.error_code == ErrorCode.ACCESS_DENIED


def test_irods_config_wraps_server_errors() -> None:
    """Verify other HTTP failures are unclassified service errors."""
    with pytest.raises(SecretsServiceError):
        VaultClient(session=DummySession(status_code=500)).irods_config("https://v", "t", "j")


@pytest.mark.parametrize(
    "payload",
    [{"data": {}}, {"errors": []}, ["not", "a", "mapping"], ValueError("bad json")],
)
def test_irods_config_rejects_unusable_payloads(payload: Any) -> None:
    """Verify payloads without a config value raise service errors."""
    with pytest.raises(SecretsServiceError):
        VaultClient(session=DummySession(payload=payload)).irods_config("https://v", "t", "j")
