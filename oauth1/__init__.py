"""OAuth 1.0a request signing package"""

from typing import Dict, Optional

from .encoding import join_pairs, parse_query, percent_encode, sorted_encode
from .models import Consumer, OAuthParameters, SignableRequest, Token
from .signer import OAuth1Signer, OAuthConfig, SignatureMethod
from .verification import parse_authorization_header, verify_signature


def build_authorization_header(
    method: str,
    url: str,
    consumer: Consumer,
    token: Optional[Token] = None,
    signature_method: SignatureMethod = SignatureMethod.HMAC_SHA256,
    realm: str = "",
) -> Dict[str, str]:
    """Sign a body-less or JSON-bodied request and return its Authorization header

    Query parameters of the URL are always part of the signature, so GET
    requests carrying their arguments in the URL are signed correctly.

    Args:
        method: HTTP method
        url: Full request URL
        consumer: Consumer key and secret
        token: Optional token key and secret
        signature_method: Signing algorithm
        realm: Optional realm attribute for the header

    Returns:
        {"Authorization": "OAuth ..."}
    """
    signer = OAuth1Signer(OAuthConfig(
        consumer=consumer,
        signature_method=signature_method,
        realm=realm,
    ))
    request = SignableRequest(method=method, url=url)
    return signer.to_header(signer.authorize(request, token))


__all__ = [
    "Consumer",
    "OAuth1Signer",
    "OAuthConfig",
    "OAuthParameters",
    "SignableRequest",
    "SignatureMethod",
    "Token",
    "build_authorization_header",
    "join_pairs",
    "parse_authorization_header",
    "parse_query",
    "percent_encode",
    "sorted_encode",
    "verify_signature",
]
