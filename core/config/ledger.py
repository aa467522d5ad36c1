"""
Shares Core Config — Ledger Configuration
=========================================
Explicit configuration object for issuer credentials and network target.

Doctrine: no process-wide operator globals. Callers build a LedgerConfig
(usually via load_ledger_config) and pass it into the gateway and services.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values, find_dotenv

ENV_OPERATOR_ACCOUNT_ID = "MY_ACCOUNT_ID"
ENV_OPERATOR_PRIVATE_KEY = "MY_PRIVATE_KEY"
ENV_SERVER_PORT = "PORT"

NETWORK_TESTNET = "testnet"
SUPPORTED_NETWORKS = frozenset({NETWORK_TESTNET})

DEFAULT_SERVER_PORT = 3001


class ConfigurationError(Exception):
    """Required configuration is missing or malformed."""

    def __init__(self, key: str, detail: str):
        self.key = key
        self.detail = detail
        super().__init__(f"Configuration error: {key}: {detail}")


# ══════════════════════════════════════════════════════════════
# LEDGER CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerConfig:
    """
    Issuer (operator) identity and network target.

    The operator pays for queries and is the treasury of newly issued
    share tokens. Only the test network is supported.
    """

    operator_account_id: str
    operator_private_key: str
    network: str = NETWORK_TESTNET

    def __post_init__(self):
        if not self.operator_account_id or not isinstance(self.operator_account_id, str):
            raise ConfigurationError(
                ENV_OPERATOR_ACCOUNT_ID, "operator account id must be a non-empty string."
            )
        if not self.operator_private_key or not isinstance(self.operator_private_key, str):
            raise ConfigurationError(
                ENV_OPERATOR_PRIVATE_KEY, "operator private key must be a non-empty string."
            )
        if self.network not in SUPPORTED_NETWORKS:
            raise ConfigurationError(
                "network", f"unsupported network '{self.network}', expected testnet."
            )

    def __repr__(self) -> str:
        return (
            f"LedgerConfig(operator_account_id={self.operator_account_id!r}, "
            f"operator_private_key='***', network={self.network!r})"
        )


@dataclass(frozen=True)
class ServerSettings:
    port: int = DEFAULT_SERVER_PORT

    def __post_init__(self):
        if not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigurationError(ENV_SERVER_PORT, f"invalid port {self.port!r}.")


# ══════════════════════════════════════════════════════════════
# LOADERS
# ══════════════════════════════════════════════════════════════

def _merged_environ(
    environ: Optional[Mapping[str, str]],
    env_file: Optional[Union[str, Path]],
) -> dict[str, str]:
    values: dict[str, str] = {}
    if env_file is None and environ is None:
        # Reading the process environment also picks up the nearest .env.
        env_file = find_dotenv(usecwd=True) or None
    if env_file is not None:
        path = Path(env_file)
        if not path.is_file():
            raise ConfigurationError("env_file", f"{path} does not exist.")
        values.update(
            {k: v for k, v in dotenv_values(path).items() if v is not None}
        )
    # Process environment wins over the file.
    values.update(os.environ if environ is None else environ)
    return values


def load_ledger_config(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Union[str, Path]] = None,
) -> LedgerConfig:
    values = _merged_environ(environ, env_file)
    account_id = values.get(ENV_OPERATOR_ACCOUNT_ID, "").strip()
    private_key = values.get(ENV_OPERATOR_PRIVATE_KEY, "").strip()
    if not account_id:
        raise ConfigurationError(ENV_OPERATOR_ACCOUNT_ID, "environment variable is not set.")
    if not private_key:
        raise ConfigurationError(ENV_OPERATOR_PRIVATE_KEY, "environment variable is not set.")
    return LedgerConfig(
        operator_account_id=account_id,
        operator_private_key=private_key,
    )


def load_server_settings(environ: Optional[Mapping[str, str]] = None) -> ServerSettings:
    values = os.environ if environ is None else environ
    raw = str(values.get(ENV_SERVER_PORT, "")).strip()
    if not raw:
        return ServerSettings()
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigurationError(ENV_SERVER_PORT, f"must be an integer, got {raw!r}.") from exc
    return ServerSettings(port=port)
