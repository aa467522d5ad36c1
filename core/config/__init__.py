"""
Shares Core Config — Public API
===============================
Issuer credentials, network target and server settings.
"""

from core.config.ledger import (
    DEFAULT_SERVER_PORT,
    ENV_OPERATOR_ACCOUNT_ID,
    ENV_OPERATOR_PRIVATE_KEY,
    NETWORK_TESTNET,
    ConfigurationError,
    LedgerConfig,
    ServerSettings,
    load_ledger_config,
    load_server_settings,
)

__all__ = [
    "DEFAULT_SERVER_PORT",
    "ENV_OPERATOR_ACCOUNT_ID",
    "ENV_OPERATOR_PRIVATE_KEY",
    "NETWORK_TESTNET",
    "ConfigurationError",
    "LedgerConfig",
    "ServerSettings",
    "load_ledger_config",
    "load_server_settings",
]
