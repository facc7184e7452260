"""Tests for Authorization header parsing and signature verification"""

import pytest

from oauth1 import (
    Consumer,
    OAuth1Signer,
    OAuthConfig,
    SignableRequest,
    SignatureMethod,
    Token,
    build_authorization_header,
    parse_authorization_header,
    verify_signature,
)

URL = "https://acct-sb1.restlets.example.com/run?script=12&deploy=1"


def test_parse_authorization_header():
    realm, params = parse_authorization_header(
        'OAuth realm="ACCT_SB1", oauth_consumer_key="ck", oauth_signature="a%2Bb%3D"'
    )
    assert realm == "ACCT_SB1"
    assert params == {"oauth_consumer_key": "ck", "oauth_signature": "a+b="}


def test_parse_authorization_header_rejects_other_schemes():
    with pytest.raises(ValueError):
        parse_authorization_header("Bearer abc")


@pytest.mark.parametrize("method", list(SignatureMethod))
def test_signed_header_verifies(method):
    signer = OAuth1Signer(OAuthConfig(
        consumer=Consumer(key="ck", secret="cs"),
        signature_method=method,
        realm="ACCT_SB1",
    ))
    request = SignableRequest(method="POST", url=URL)
    header = signer.to_header(signer.authorize(request, Token(key="tk", secret="ts")))["Authorization"]

    assert verify_signature("POST", URL, header, "cs", "ts")


def test_wrong_secret_fails_verification():
    header = build_authorization_header("POST", URL, Consumer(key="ck", secret="cs"), Token(key="tk", secret="ts"))
    assert not verify_signature("POST", URL, header["Authorization"], "cs", "other")


def test_tampered_url_fails_verification():
    header = build_authorization_header("POST", URL, Consumer(key="ck", secret="cs"), Token(key="tk", secret="ts"))
    tampered = URL.replace("deploy=1", "deploy=2")
    assert not verify_signature("POST", tampered, header["Authorization"], "cs", "ts")


def test_get_query_parameters_are_signed():
    url = "https://acct.restlets.example.com/run?q=SELECT%201"
    header = build_authorization_header("GET", url, Consumer(key="ck", secret="cs"))["Authorization"]

    assert 'oauth_signature_method="HMAC-SHA256"' in header
    assert "oauth_token" not in header
    assert verify_signature("GET", url, header, "cs")
    assert not verify_signature("GET", "https://acct.restlets.example.com/run?q=SELECT%202", header, "cs")


def test_missing_parameters_fail_verification():
    assert not verify_signature("POST", URL, 'OAuth oauth_consumer_key="ck"', "cs")


def test_non_oauth_header_fails_verification():
    assert not verify_signature("POST", URL, "Basic Zm9vOmJhcg==", "cs")
