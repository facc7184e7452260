"""OAuth 1.0a request signer

Builds the signature base string, computes PLAINTEXT / HMAC-SHA1 /
HMAC-SHA256 signatures and renders the Authorization header (RFC 5849).
"""

import base64
import hashlib
import hmac
import secrets
import string
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from .encoding import join_pairs, merge_params, parse_query, percent_encode, sorted_encode
from .models import Consumer, OAuthParameters, SignableRequest, Token

NONCE_ALPHABET = string.ascii_letters + string.digits
DEFAULT_NONCE_LENGTH = 32
OAUTH_VERSION = "1.0"

OAuthParamsLike = Union[OAuthParameters, Mapping[str, str]]


class SignatureMethod(str, Enum):
    """Supported oauth_signature_method values"""
    PLAINTEXT = "PLAINTEXT"
    HMAC_SHA1 = "HMAC-SHA1"
    HMAC_SHA256 = "HMAC-SHA256"


@dataclass(frozen=True)
class OAuthConfig:
    """Signer configuration

    Attributes:
        consumer: Consumer key and secret
        signature_method: How the base string is signed
        realm: Optional realm attribute for the Authorization header
        nonce_length: Number of characters in generated nonces
        version: Value sent as oauth_version
        last_ampersand: Keep the trailing '&' in the signing key when there
                        is no token secret
        parameter_separator: Separator between header attributes
    """
    consumer: Consumer
    signature_method: SignatureMethod = SignatureMethod.PLAINTEXT
    realm: str = ""
    nonce_length: int = DEFAULT_NONCE_LENGTH
    version: str = OAUTH_VERSION
    last_ampersand: bool = True
    parameter_separator: str = ", "

    def __post_init__(self):
        # Accept plain strings, reject anything outside the enum
        object.__setattr__(self, "signature_method", SignatureMethod(self.signature_method))
        if self.nonce_length < 1:
            raise ValueError(f"nonce_length must be positive, got {self.nonce_length}")


def _params_dict(oauth_params: OAuthParamsLike) -> Dict[str, str]:
    if isinstance(oauth_params, OAuthParameters):
        return oauth_params.as_dict()
    return {key: str(value) for key, value in oauth_params.items()}


class OAuth1Signer:
    """Stateless OAuth 1.0a signer bound to one OAuthConfig"""

    def __init__(self, config: OAuthConfig):
        self.config = config

    def authorize(
        self,
        request: SignableRequest,
        token: Optional[Token] = None,
        *,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> OAuthParameters:
        """Generate the oauth_* parameters for a request, signature included

        Args:
            request: The request to sign
            token: Optional token key/secret
            nonce: Fixed nonce (tests only); generated when omitted
            timestamp: Fixed timestamp (tests only); current time when omitted

        Returns:
            Signed OAuthParameters
        """
        token = token or Token()
        params = OAuthParameters(
            consumer_key=self.config.consumer.key,
            nonce=nonce if nonce is not None else self.generate_nonce(),
            signature_method=self.config.signature_method.value,
            timestamp=timestamp if timestamp is not None else self.generate_timestamp(),
            version=self.config.version,
            token=token.key or None,
        )
        return replace(params, signature=self.get_signature(request, token.secret, params))

    def get_signature(
        self,
        request: SignableRequest,
        token_secret: Optional[str],
        oauth_params: OAuthParamsLike,
    ) -> str:
        """Sign the base string of a request with the configured method"""
        signing_key = self.get_signing_key(token_secret)
        method = self.config.signature_method

        if method is SignatureMethod.PLAINTEXT:
            return signing_key

        if method is SignatureMethod.HMAC_SHA1:
            digestmod = hashlib.sha1
        elif method is SignatureMethod.HMAC_SHA256:
            digestmod = hashlib.sha256
        else:
            raise ValueError(f"Unsupported signature method: {method}")

        base_string = self.get_base_string(request, oauth_params)
        digest = hmac.new(
            signing_key.encode("utf-8"),
            base_string.encode("utf-8"),
            digestmod,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def get_base_string(self, request: SignableRequest, oauth_params: OAuthParamsLike) -> str:
        """METHOD&encoded(base_url)&encoded(parameter_string)"""
        return "&".join([
            request.method.upper(),
            percent_encode(self.get_base_url(request.url)),
            percent_encode(self.get_parameter_string(request, oauth_params)),
        ])

    def get_parameter_string(self, request: SignableRequest, oauth_params: OAuthParamsLike) -> str:
        """Normalized parameters: oauth params, form params and URL query"""
        protocol = _params_dict(oauth_params)
        protocol.pop("oauth_signature", None)
        merged = merge_params(protocol, request.form_params, parse_query(request.url))
        return join_pairs(sorted_encode(merged))

    def get_signing_key(self, token_secret: Optional[str] = None) -> str:
        """encoded(consumer_secret)&encoded(token_secret)"""
        token_secret = token_secret or ""
        consumer_secret = percent_encode(self.config.consumer.secret)
        if not self.config.last_ampersand and not token_secret:
            return consumer_secret
        return f"{consumer_secret}&{percent_encode(token_secret)}"

    @staticmethod
    def get_base_url(url: str) -> str:
        """Strip the query string and fragment from a URL"""
        return url.split("#", 1)[0].split("?", 1)[0]

    def to_header(self, oauth_params: OAuthParamsLike) -> Dict[str, str]:
        """Render the Authorization header for signed parameters

        Returns:
            {"Authorization": "OAuth realm=\"...\", oauth_consumer_key=\"...\", ..."}
        """
        data = _params_dict(oauth_params)
        attributes = []

        if self.config.realm:
            attributes.append(f'realm="{percent_encode(self.config.realm)}"')

        for key in sorted(data):
            if not key.startswith("oauth_"):
                continue
            attributes.append(f'{percent_encode(key)}="{percent_encode(data[key])}"')

        return {"Authorization": "OAuth " + self.config.parameter_separator.join(attributes)}

    def generate_nonce(self) -> str:
        """Random [A-Za-z0-9] string of the configured length"""
        return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(self.config.nonce_length))

    @staticmethod
    def generate_timestamp() -> int:
        """Current Unix time in whole seconds"""
        return int(time.time())
