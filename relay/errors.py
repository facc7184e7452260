"""
Error taxonomy of the relay pipeline.

Every dispatch failure maps to exactly one RelayError subclass. Messages
carry realms, account names, URLs and status codes only, never secrets.
"""
from typing import Any, Dict


class RelayError(Exception):
    """Base class for dispatch failures"""

    kind = "relay_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Structured form returned to callers"""
        return {"error": {"kind": self.kind, "message": self.message}}


class InvalidUrlError(RelayError):
    """Target URL has no extractable host label"""

    kind = "invalid_url"
    status_code = 400


class CredentialNotFoundError(RelayError):
    """No credential (or account) matches the requested realm"""

    kind = "credential_not_found"
    status_code = 404


class SigningError(RelayError):
    """Unexpected failure while building the base string or signature"""

    kind = "signing_error"
    status_code = 500


class TransportError(RelayError):
    """Network failure, timeout, enforced non-2xx status or unparseable body"""

    kind = "transport_error"
    status_code = 502


class ConfigurationError(ValueError):
    """Credential or account configuration is malformed"""
