"""Client for the secrets service that holds per-job storage configs."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from gridstage.config import VAULT_MOUNT, VAULT_TIMEOUT
from gridstage.errors import ErrorCode, SecretsServiceError, StagingError

log = logging.getLogger(__name__)

CONFIG_KEY = "config"
CONNECT_TIMEOUT = 5.0


def _require(value: Optional[str], option: str) -> str:
    """Return ``value`` or raise a missing-option failure naming ``option``."""
    if not value:
        raise StagingError(ErrorCode.MISSING_OPTION, option=option)
    return value


def _encode_config(value: Any) -> bytes:
    """Encode a secret payload as the bytes handed to the transfer tool."""
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value, sort_keys=True).encode("utf-8")


class VaultClient:
    """
    Read storage-access configurations from a Vault-compatible secrets service.

    Each job's config is stored under ``<mount>/<job-uuid>`` with the
    rendered config in the ``config`` key.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        mount: str = VAULT_MOUNT,
        timeout: Optional[tuple[float, float]] = None,
    ):
        self.timeout = timeout or (CONNECT_TIMEOUT, float(VAULT_TIMEOUT))
        self.mount = mount.strip("/")
        self.session = session or requests.Session()

    def _build_secret_url(self, addr: str, job_uuid: str) -> str:
        """Construct the full URL for a job's secret."""
        return f"{addr.rstrip('/')}/v1/{self.mount}/{job_uuid}"

    def irods_config(
        self,
        addr: Optional[str],
        token: Optional[str],
        job_uuid: Optional[str],
    ) -> bytes:
        """
        Fetch the storage config for ``job_uuid``.

        Parameters:
            addr (str): Base address of the secrets service.
            token (str): Access token sent as ``X-Vault-Token``.
            job_uuid (str): Identifier of the job whose secret is read.

        Returns:
            bytes: The config contents.

        Raises:
            StagingError: If a credential is missing or access is denied.
            SecretsServiceError: If the service fails or the secret has no config.
        """
        addr = _require(addr, "VAULT_ADDR")
        token = _require(token, "VAULT_TOKEN")
        job_uuid = _require(job_uuid, "JOB_UUID")

        url = self._build_secret_url(addr, job_uuid)
        log.info("Fetching storage config for job %s", job_uuid)
        response = self.session.get(
            url,
            headers={"X-Vault-Token": token},
            timeout=self.timeout,
        )
        if response.status_code == 403:
            raise StagingError(ErrorCode.ACCESS_DENIED)
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise SecretsServiceError(f"Secrets service request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise SecretsServiceError("Secrets service returned a non-JSON payload") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or CONFIG_KEY not in data:
            raise SecretsServiceError(f"Secret for job {job_uuid} has no '{CONFIG_KEY}' value")
        return _encode_config(data[CONFIG_KEY])
