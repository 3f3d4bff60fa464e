"""Option enrichment from the process environment and the secrets service."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from gridstage.domain.options import OptionsT
from gridstage.grid.vault import VaultClient

log = logging.getLogger(__name__)


def vault_settings(options: OptionsT, environ: Optional[Mapping[str, str]] = None) -> OptionsT:
    """
    Copy ``VAULT_TOKEN``, ``VAULT_ADDR`` and ``JOB_UUID`` into the options.

    Values are copied as found, absent or empty included. Rejecting missing
    values is left to the secrets client and the validators.
    """
    env = os.environ if environ is None else environ
    return options.with_vault_settings(
        vault_token=env.get("VAULT_TOKEN"),
        vault_addr=env.get("VAULT_ADDR"),
        job_uuid=env.get("JOB_UUID"),
    )


def read_vault_config(options: OptionsT, client: Optional[VaultClient] = None) -> OptionsT:
    """
    Attach the storage config to the options.

    A ``--debug-config`` file is read verbatim and the secrets service is
    never contacted. Otherwise the config is fetched for the job.
    """
    if options.debug_config:
        log.warning("Using local debug config %s", options.debug_config)
        with open(options.debug_config, "rb") as config_file:
            return options.with_config(config_file.read())

    client = client or VaultClient()
    return options.with_config(
        client.irods_config(options.vault_addr, options.vault_token, options.job_uuid)
    )


def enrich(
    options: OptionsT,
    environ: Optional[Mapping[str, str]] = None,
    client: Optional[VaultClient] = None,
) -> OptionsT:
    """Run both enrichment passes in order."""
    return read_vault_config(vault_settings(options, environ), client)
