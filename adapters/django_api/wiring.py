"""
Shares Django Adapter Wiring
============================
Constructs HttpApiDependencies for live and local runs.

This module is adapter-only glue:
- SHARES_LEDGER_BACKEND selects the gateway ("hedera" or "memory")
- the hedera backend requires MY_ACCOUNT_ID / MY_PRIVATE_KEY
- the memory backend seeds dev accounts for smoke usage
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from core.config.ledger import (
    ConfigurationError,
    ENV_OPERATOR_ACCOUNT_ID,
    LedgerConfig,
    load_ledger_config,
)
from core.http_api.dependencies import HttpApiDependencies, build_http_dependencies
from core.ownership.locks import TransferLockRegistry

LEDGER_BACKEND_HEDERA = "hedera"
LEDGER_BACKEND_MEMORY = "memory"
LEDGER_BACKENDS = (LEDGER_BACKEND_HEDERA, LEDGER_BACKEND_MEMORY)

DEV_OPERATOR_ACCOUNT_ID = "0.0.2"
DEV_OPERATOR_PRIVATE_KEY = "dev-operator-key"
DEV_MARKET_ACCOUNT_ID = "0.0.2001"
DEV_MARKET_PRIVATE_KEY = "dev-market-key"
DEV_RECIPIENT_ACCOUNT_ID = "0.0.2002"
DEV_RECIPIENT_PRIVATE_KEY = "dev-recipient-key"

logger = logging.getLogger("shares.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _memory_config(env_file) -> LedgerConfig:
    try:
        return load_ledger_config(env_file=env_file)
    except ConfigurationError as exc:
        if exc.key != ENV_OPERATOR_ACCOUNT_ID:
            raise
        return LedgerConfig(
            operator_account_id=DEV_OPERATOR_ACCOUNT_ID,
            operator_private_key=DEV_OPERATOR_PRIVATE_KEY,
        )


def create_dependencies(
    backend: str = LEDGER_BACKEND_HEDERA,
    env_file=None,
) -> HttpApiDependencies:
    if backend not in LEDGER_BACKENDS:
        raise ConfigurationError(
            "SHARES_LEDGER_BACKEND",
            f"unknown backend '{backend}', expected one of {', '.join(LEDGER_BACKENDS)}.",
        )

    if backend == LEDGER_BACKEND_MEMORY:
        from adapters.memory.gateway import InMemoryLedgerGateway

        config = _memory_config(env_file)
        gateway = InMemoryLedgerGateway()
        gateway.create_account(config.operator_private_key, config.operator_account_id)
        gateway.create_account(DEV_MARKET_PRIVATE_KEY, DEV_MARKET_ACCOUNT_ID)
        gateway.create_account(DEV_RECIPIENT_PRIVATE_KEY, DEV_RECIPIENT_ACCOUNT_ID)
    else:
        from adapters.hedera.gateway import HederaLedgerGateway

        config = load_ledger_config(env_file=env_file)
        gateway = HederaLedgerGateway(config)

    logger.info(f"Ledger backend '{backend}' wired for {config!r}")
    return build_http_dependencies(
        config=config,
        gateway=gateway,
        locks=TransferLockRegistry(),
        ledger_backend=backend,
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = create_dependencies(
                backend=getattr(settings, "SHARES_LEDGER_BACKEND", LEDGER_BACKEND_HEDERA),
                env_file=getattr(settings, "SHARES_ENV_FILE", None),
            )
        return _DEPENDENCIES


def reset_dependencies() -> None:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
