"""Immutable option models built from the command line and environment."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TypeVar

MetaGroup = tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GetOptions:
    """Options recognized by ``gridstage get``."""

    user: str | None = None
    debug_config: str | None = None
    source: str | None = None
    source_list: str | None = None
    destination: str = "."
    meta: tuple[MetaGroup, ...] = ()
    help: bool = False
    vault_token: str | None = None
    vault_addr: str | None = None
    job_uuid: str | None = None
    config: bytes | None = None

    def with_vault_settings(
        self,
        *,
        vault_token: str | None,
        vault_addr: str | None,
        job_uuid: str | None,
    ) -> GetOptions:
        """Return a copy carrying the secrets-service credentials."""
        return replace(self, vault_token=vault_token, vault_addr=vault_addr, job_uuid=job_uuid)

    def with_config(self, config: bytes) -> GetOptions:
        """Return a copy carrying the storage-access configuration."""
        return replace(self, config=config)


@dataclass(frozen=True, slots=True)
class PutOptions:
    """Options recognized by ``gridstage put``."""

    user: str | None = None
    debug_config: str | None = None
    exclude: str = ""
    exclude_delimiter: str = "\n"
    include: str = ""
    include_delimiter: str = ","
    source: str = "."
    destination: str | None = None
    meta: tuple[MetaGroup, ...] = ()
    skip_parent_meta: bool = False
    help: bool = False
    vault_token: str | None = None
    vault_addr: str | None = None
    job_uuid: str | None = None
    config: bytes | None = None

    def with_vault_settings(
        self,
        *,
        vault_token: str | None,
        vault_addr: str | None,
        job_uuid: str | None,
    ) -> PutOptions:
        """Return a copy carrying the secrets-service credentials."""
        return replace(self, vault_token=vault_token, vault_addr=vault_addr, job_uuid=job_uuid)

    def with_config(self, config: bytes) -> PutOptions:
        """Return a copy carrying the storage-access configuration."""
        return replace(self, config=config)


OptionsT = TypeVar("OptionsT", GetOptions, PutOptions)
