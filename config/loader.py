"""Configuration loader for Realm Relay

Scalar settings are read with the following priority:
1. Environment variables (highest priority)
2. .env file
3. Hardcoded defaults (lowest priority)

Credential and remote account lists are parsed and validated once, at
startup, into an immutable RelayConfig.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from relay.accounts import AccountDirectory
from relay.credentials import CredentialStore
from relay.errors import ConfigurationError
from relay.models import Credential, RemoteAccountDescriptor
from relay.runtime import RelayConfig

# Set up logger for config loader
logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles loading configuration from various sources"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        """Load environment variables from .env file if it exists"""
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded environment variables from {self.env_path}")
        else:
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")

    def get(self, env_var: str, default: Any) -> Any:
        """Get a configuration value with priority: env > default

        Args:
            env_var: Environment variable name to check
            default: Default value if not found in environment

        Returns:
            The configuration value from environment or default
        """
        env_value = os.getenv(env_var)
        if env_value is None:
            if isinstance(default, str) and default.startswith("~/"):
                return str(Path(default).expanduser())
            return default

        # bool before int: bool is an int subclass
        if isinstance(default, bool):
            return env_value.strip().lower() in ('true', '1', 'yes')

        for kind in (int, float):
            if isinstance(default, kind):
                try:
                    return kind(env_value)
                except ValueError:
                    # Value may be a secret, so it is not echoed
                    logger.warning(f"Failed to parse {env_var} as {kind.__name__}, using default: {default}")
                    return default

        return env_value


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def _validation_summary(error: ValidationError) -> str:
    # Field locations and messages only; input values may be secrets
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    )


def parse_credentials(data: Any) -> List[Credential]:
    """Validate a decoded credential list

    The list must be dense: null or non-object entries are rejected rather
    than skipped.

    Raises:
        ConfigurationError: If the list or any entry is malformed
    """
    if not isinstance(data, list):
        raise ConfigurationError(f"Credential configuration must be a list, got {type(data).__name__}")

    credentials = []
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Credential entry at index {idx} is not an object")
        try:
            credentials.append(Credential.model_validate(entry))
        except ValidationError as e:
            raise ConfigurationError(
                f"Credential entry at index {idx} is invalid: {_validation_summary(e)}"
            ) from None

    return credentials


def load_credentials(path: str) -> List[Credential]:
    """Load and validate the credential list from a JSON file

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    credentials_path = Path(path).expanduser().resolve()
    if not credentials_path.exists():
        raise ConfigurationError(f"Credentials file not found: {credentials_path}")

    try:
        data = json.loads(credentials_path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse {credentials_path}: line {e.lineno}, column {e.colno}") from None
    except IOError as e:
        raise ConfigurationError(f"Failed to read {credentials_path}: {e.strerror}") from None

    credentials = parse_credentials(data)
    logger.info(f"Loaded {len(credentials)} credential(s) from {credentials_path}: "
                f"{[c.realm for c in credentials]}")
    return credentials


def load_remote_accounts(raw: Optional[str]) -> List[RemoteAccountDescriptor]:
    """Parse the remote account setting (a JSON array string)

    An empty or missing setting yields an empty list.

    Raises:
        ConfigurationError: If the setting is not a valid array of accounts
    """
    if not raw or not raw.strip():
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Remote account setting is not valid JSON: {e.msg}") from None

    if not isinstance(data, list):
        raise ConfigurationError(f"Remote account setting must be a list, got {type(data).__name__}")

    descriptors = []
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Remote account entry at index {idx} is not an object")
        try:
            descriptors.append(RemoteAccountDescriptor.model_validate(entry))
        except ValidationError as e:
            raise ConfigurationError(
                f"Remote account entry at index {idx} is invalid: {_validation_summary(e)}"
            ) from None

    logger.info(f"Loaded {len(descriptors)} remote account(s): {[d.account for d in descriptors]}")
    return descriptors


def build_relay_config(
    credentials_file: str,
    remote_accounts: Optional[str] = None,
    connect_timeout: float = 10.0,
    request_timeout: float = 120.0,
    enforce_http_status: bool = False,
    nonce_length: int = 32,
) -> RelayConfig:
    """Build the immutable RelayConfig used for the lifetime of the process"""
    return RelayConfig(
        credentials=CredentialStore(load_credentials(credentials_file)),
        accounts=AccountDirectory(load_remote_accounts(remote_accounts)),
        connect_timeout=connect_timeout,
        request_timeout=request_timeout,
        enforce_http_status=enforce_http_status,
        nonce_length=nonce_length,
    )
