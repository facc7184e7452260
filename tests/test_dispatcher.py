"""Tests for the request dispatcher"""

import json
import logging
import re

import httpx
import pytest

from oauth1 import parse_authorization_header
from relay import (
    CredentialNotFoundError,
    InvalidUrlError,
    RelayConfig,
    RequestDispatcher,
    SigningError,
    TransportError,
)

TARGET = "https://acct-sb1.restlets.example.com/run"
PAYLOAD = {"query": "SELECT 1"}


@pytest.mark.asyncio
async def test_end_to_end_signed_relay(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    result = await dispatcher.send(TARGET, PAYLOAD)

    assert result == {"echo": PAYLOAD}
    assert len(remote.requests) == 1

    request = remote.requests[0]
    assert request.method == "POST"
    assert str(request.url) == TARGET
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == PAYLOAD

    header = request.headers["Authorization"]
    assert header.startswith('OAuth realm="ACCT_SB1", oauth_consumer_key="ck"')
    realm, params = parse_authorization_header(header)
    assert realm == "ACCT_SB1"
    assert list(params) == [
        "oauth_consumer_key",
        "oauth_nonce",
        "oauth_signature",
        "oauth_signature_method",
        "oauth_timestamp",
        "oauth_token",
        "oauth_version",
    ]
    assert params["oauth_signature_method"] == "HMAC-SHA256"
    assert params["oauth_token"] == "tk"
    assert params["oauth_version"] == "1.0"
    assert re.fullmatch(r"[A-Za-z0-9]{32}", params["oauth_nonce"])
    assert params["oauth_timestamp"].isdigit()


@pytest.mark.asyncio
async def test_selects_credential_by_realm(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    await dispatcher.send("https://acct.restlets.example.com/run", PAYLOAD)

    assert 'oauth_consumer_key="ck-prod"' in remote.requests[0].headers["Authorization"]


@pytest.mark.asyncio
async def test_invalid_url(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    with pytest.raises(InvalidUrlError):
        await dispatcher.send("https://localhost/run", PAYLOAD)
    assert remote.requests == []


@pytest.mark.asyncio
async def test_unknown_realm(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    with pytest.raises(CredentialNotFoundError):
        await dispatcher.send("https://other.restlets.example.com/run", PAYLOAD)
    assert remote.requests == []


@pytest.mark.asyncio
async def test_dispatch_returns_structured_error(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    result = await dispatcher.dispatch("https://other.restlets.example.com/run", PAYLOAD)

    assert result == {
        "error": {"kind": "credential_not_found", "message": "No credential configured for realm: OTHER"}
    }


@pytest.mark.asyncio
async def test_remote_application_error_is_relayed(relay_config, credentials):
    from .conftest import RemoteEndpoint

    remote_error = {"error": {"name": "INVALID_SEARCH", "message": "Invalid query"}}
    remote = RemoteEndpoint(credentials, response=remote_error)
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    assert await dispatcher.send(TARGET, PAYLOAD) == remote_error


@pytest.mark.asyncio
async def test_non_2xx_relayed_by_default(relay_config, credentials):
    from .conftest import RemoteEndpoint

    remote = RemoteEndpoint(credentials, response={"error": "busy"}, status_code=503)
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    assert await dispatcher.send(TARGET, PAYLOAD) == {"error": "busy"}


@pytest.mark.asyncio
async def test_non_2xx_enforced(relay_config, credentials):
    from .conftest import RemoteEndpoint

    remote = RemoteEndpoint(credentials, response={"error": "busy"}, status_code=503)
    config = RelayConfig(
        credentials=relay_config.credentials,
        accounts=relay_config.accounts,
        enforce_http_status=True,
    )
    dispatcher = RequestDispatcher(config, transport=httpx.MockTransport(remote))

    with pytest.raises(TransportError) as exc_info:
        await dispatcher.send(TARGET, PAYLOAD)
    assert "503" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_failure(relay_config):
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(fail))

    result = await dispatcher.dispatch(TARGET, PAYLOAD)

    assert result["error"]["kind"] == "transport_error"


@pytest.mark.asyncio
async def test_timeout(relay_config):
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(slow))

    with pytest.raises(TransportError) as exc_info:
        await dispatcher.send(TARGET, PAYLOAD)
    assert "timed out" in exc_info.value.message


@pytest.mark.asyncio
async def test_non_json_response(relay_config):
    dispatcher = RequestDispatcher(
        relay_config,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>")),
    )

    with pytest.raises(TransportError):
        await dispatcher.send(TARGET, PAYLOAD)


@pytest.mark.asyncio
async def test_signing_failure_is_wrapped(relay_config, remote, monkeypatch):
    def broken_authorize(self, request, token=None, **kwargs):
        raise RuntimeError("cs ts")

    monkeypatch.setattr("relay.dispatcher.OAuth1Signer.authorize", broken_authorize)
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    with pytest.raises(SigningError) as exc_info:
        await dispatcher.send(TARGET, PAYLOAD)
    assert exc_info.value.message == "Failed to sign request for realm ACCT_SB1: RuntimeError"
    assert remote.requests == []


@pytest.mark.asyncio
async def test_send_to_account(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    assert await dispatcher.send_to_account("sb1", PAYLOAD) == {"echo": PAYLOAD}
    assert str(remote.requests[0].url) == TARGET


@pytest.mark.asyncio
async def test_dispatch_to_unknown_account(relay_config, remote):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    result = await dispatcher.dispatch_to_account("missing", PAYLOAD)

    assert result["error"]["kind"] == "credential_not_found"
    assert "missing" in result["error"]["message"]


@pytest.mark.asyncio
async def test_secrets_never_logged(relay_config, remote, caplog):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    with caplog.at_level(logging.DEBUG):
        await dispatcher.send("https://acct.restlets.example.com/run", PAYLOAD)
        await dispatcher.dispatch("https://other.restlets.example.com/run", PAYLOAD)

    assert "SIGNING" in caplog.text
    assert "[REDACTED]" in caplog.text
    assert "cs-prod" not in caplog.text
    assert "ts-prod" not in caplog.text
    assert "oauth_signature" not in caplog.text


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [
    "https://acct-sb1.restlets.example.com:99999/run",
    "https://acct-sb1.restlets.example.com:abc/run",
])
async def test_unparseable_url_with_valid_realm(relay_config, remote, url):
    dispatcher = RequestDispatcher(relay_config, transport=httpx.MockTransport(remote))

    result = await dispatcher.dispatch(url, PAYLOAD)

    assert result["error"]["kind"] == "transport_error"
    assert result["error"]["message"].endswith("InvalidURL")
    assert remote.requests == []
