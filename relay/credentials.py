"""
Read-only, realm-keyed credential table.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping

from .errors import ConfigurationError, CredentialNotFoundError
from .models import Credential

logger = logging.getLogger(__name__)


class CredentialStore:
    """Immutable lookup of credentials by exact realm

    Built once at startup and shared by every dispatch. There are no
    mutation methods.
    """

    def __init__(self, credentials: Iterable[Credential]):
        table = {}
        for credential in credentials:
            if not isinstance(credential, Credential):
                raise ConfigurationError(f"Expected Credential, got {type(credential).__name__}")
            if credential.realm in table:
                raise ConfigurationError(f"Duplicate credential realm: {credential.realm}")
            table[credential.realm] = credential

        self._table: Mapping[str, Credential] = MappingProxyType(table)
        logger.debug(f"Credential store initialized with realms: {sorted(table)}")

    def find(self, realm: str) -> Credential:
        """Return the credential whose realm equals `realm` exactly

        Raises:
            CredentialNotFoundError: If no entry matches
        """
        try:
            return self._table[realm]
        except KeyError:
            raise CredentialNotFoundError(f"No credential configured for realm: {realm}") from None

    def realms(self) -> List[str]:
        return sorted(self._table)

    def __contains__(self, realm: object) -> bool:
        return realm in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Credential]:
        return iter(self._table.values())
