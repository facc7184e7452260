"""
Immutable runtime configuration shared by the dispatcher, the app and the CLI.
"""
from dataclasses import dataclass, field

from .accounts import AccountDirectory
from .credentials import CredentialStore

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_REQUEST_TIMEOUT = 120.0


@dataclass(frozen=True)
class RelayConfig:
    """Everything a dispatch needs, built once at process start

    Attributes:
        credentials: Realm-keyed credential table
        accounts: Remote account directory
        connect_timeout: Seconds allowed to establish the connection
        request_timeout: Seconds allowed for the whole outbound call
        enforce_http_status: Treat non-2xx responses as transport errors
        nonce_length: Characters per generated nonce
    """
    credentials: CredentialStore
    accounts: AccountDirectory = field(default_factory=AccountDirectory)
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    enforce_http_status: bool = False
    nonce_length: int = 32
