"""
Realm Relay - OAuth 1.0a signed request relay.

Resolves the realm of a target URL, signs the request with that realm's
credential and forwards it.
"""
from .accounts import AccountDirectory
from .credentials import CredentialStore
from .dispatcher import DispatchState, RequestDispatcher
from .errors import (
    ConfigurationError,
    CredentialNotFoundError,
    InvalidUrlError,
    RelayError,
    SigningError,
    TransportError,
)
from .models import Credential, RemoteAccountDescriptor
from .realm import resolve_realm
from .runtime import RelayConfig

__version__ = "1.0.0"

__all__ = [
    'AccountDirectory',
    'ConfigurationError',
    'Credential',
    'CredentialNotFoundError',
    'CredentialStore',
    'DispatchState',
    'InvalidUrlError',
    'RelayConfig',
    'RelayError',
    'RemoteAccountDescriptor',
    'RequestDispatcher',
    'SigningError',
    'TransportError',
    'resolve_realm',
]
