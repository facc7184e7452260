"""Builds the process-wide RelayConfig from settings"""

import settings
from relay.runtime import RelayConfig
from .loader import build_relay_config


def relay_config_from_settings() -> RelayConfig:
    """Load credentials and remote accounts named by the current settings"""
    return build_relay_config(
        credentials_file=settings.CREDENTIALS_FILE,
        remote_accounts=settings.REMOTE_ACCOUNTS,
        connect_timeout=settings.CONNECT_TIMEOUT,
        request_timeout=settings.REQUEST_TIMEOUT,
        enforce_http_status=settings.ENFORCE_HTTP_STATUS,
        nonce_length=settings.NONCE_LENGTH,
    )
