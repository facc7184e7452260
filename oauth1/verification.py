"""
OAuth 1.0a Authorization header parsing and signature verification.
Mirrors what a remote endpoint checks before accepting a signed call.
"""

import hmac
from typing import Dict, Optional, Tuple
from urllib.parse import unquote

from .encoding import ParamValue
from .models import Consumer, SignableRequest
from .signer import OAuth1Signer, OAuthConfig, SignatureMethod

REQUIRED_PARAMS = (
    "oauth_consumer_key",
    "oauth_nonce",
    "oauth_signature",
    "oauth_signature_method",
    "oauth_timestamp",
)


def parse_authorization_header(auth_header: str) -> Tuple[str, Dict[str, str]]:
    """Parse an OAuth Authorization header

    Returns:
        Tuple of (realm, oauth parameters). realm is "" when absent.

    Raises:
        ValueError: If the header does not use the OAuth scheme
    """
    if not auth_header.startswith("OAuth "):
        raise ValueError("Not an OAuth authorization header")

    realm = ""
    params = {}
    for attribute in auth_header[len("OAuth "):].split(","):
        attribute = attribute.strip()
        if "=" not in attribute:
            continue
        key, value = attribute.split("=", 1)
        value = unquote(value.strip().strip('"'))
        if key == "realm":
            realm = value
        else:
            params[unquote(key)] = value

    return realm, params


def verify_signature(
    method: str,
    url: str,
    auth_header: str,
    consumer_secret: str,
    token_secret: str = "",
    form_params: Optional[Dict[str, ParamValue]] = None,
) -> bool:
    """Check the signature carried by an Authorization header

    Args:
        method: HTTP method of the received request
        url: Full URL of the received request
        auth_header: Value of the Authorization header
        consumer_secret: Secret matching oauth_consumer_key
        token_secret: Secret matching oauth_token
        form_params: Form-encoded body parameters, if any

    Returns:
        True if the signature matches, False otherwise
    """
    try:
        _, params = parse_authorization_header(auth_header)
    except ValueError:
        return False

    if not all(key in params for key in REQUIRED_PARAMS):
        return False

    try:
        signature_method = SignatureMethod(params["oauth_signature_method"])
    except ValueError:
        return False

    provided = params.pop("oauth_signature")
    signer = OAuth1Signer(OAuthConfig(
        consumer=Consumer(key=params["oauth_consumer_key"], secret=consumer_secret),
        signature_method=signature_method,
    ))
    request = SignableRequest(method=method, url=url, form_params=form_params or {})
    expected = signer.get_signature(request, token_secret, params)

    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))
