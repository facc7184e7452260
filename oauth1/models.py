"""Data models for OAuth 1.0a request signing"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .encoding import ParamValue


@dataclass(frozen=True)
class Consumer:
    """Identity of the calling integration

    Attributes:
        key: Consumer key sent as oauth_consumer_key
        secret: Consumer secret, only ever used inside the signing key
    """
    key: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class Token:
    """Identity of the acting principal on the remote side

    Attributes:
        key: Token id sent as oauth_token
        secret: Token secret, only ever used inside the signing key
    """
    key: Optional[str] = None
    secret: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class SignableRequest:
    """The parts of an HTTP request that take part in the signature

    Attributes:
        method: HTTP method
        url: Full request URL, query string included
        form_params: Form-encoded body parameters (empty for JSON bodies)
    """
    method: str
    url: str
    form_params: Dict[str, ParamValue] = field(default_factory=dict)


@dataclass(frozen=True)
class OAuthParameters:
    """The oauth_* protocol parameters of one signed request"""
    consumer_key: str
    nonce: str
    signature_method: str
    timestamp: int
    version: str
    token: Optional[str] = None
    signature: Optional[str] = None

    def as_dict(self, include_signature: bool = True) -> Dict[str, str]:
        """Render the parameters under their wire names"""
        data = {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": self.nonce,
            "oauth_signature_method": self.signature_method,
            "oauth_timestamp": str(self.timestamp),
            "oauth_version": self.version,
        }
        if self.token:
            data["oauth_token"] = self.token
        if include_signature and self.signature is not None:
            data["oauth_signature"] = self.signature
        return data
