"""
Read-only directory of remote account descriptors, keyed by account.
"""
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .errors import ConfigurationError, CredentialNotFoundError
from .models import RemoteAccountDescriptor


class AccountDirectory:
    """Immutable lookup of remote accounts by their `account` field"""

    def __init__(self, descriptors: Iterable[RemoteAccountDescriptor] = ()):
        table = {}
        for descriptor in descriptors:
            if descriptor.account in table:
                raise ConfigurationError(f"Duplicate remote account: {descriptor.account}")
            table[descriptor.account] = descriptor
        self._table: Mapping[str, RemoteAccountDescriptor] = MappingProxyType(table)

    def find(self, account: str) -> RemoteAccountDescriptor:
        """Return the descriptor for an account

        Raises:
            CredentialNotFoundError: If the account is not configured
        """
        try:
            return self._table[account]
        except KeyError:
            raise CredentialNotFoundError(f"No remote account configured: {account}") from None

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[RemoteAccountDescriptor]:
        return iter(self._table.values())
