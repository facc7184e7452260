"""Configuration management package for Realm Relay"""

from .loader import (
    ConfigLoader,
    build_relay_config,
    get_config_loader,
    load_credentials,
    load_remote_accounts,
    parse_credentials,
)

__all__ = [
    "ConfigLoader",
    "build_relay_config",
    "get_config_loader",
    "load_credentials",
    "load_remote_accounts",
    "parse_credentials",
]
