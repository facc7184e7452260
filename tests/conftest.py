import json

import httpx
import pytest

from oauth1 import verify_signature
from relay import AccountDirectory, Credential, CredentialStore, RelayConfig, RemoteAccountDescriptor

CREDENTIAL_ENTRIES = [
    {
        "realm": "ACCT",
        "consumer": {"name": "Relay", "key": "ck-prod", "secret": "cs-prod"},
        "token": {"name": "Relay - Admin", "id": "tk-prod", "secret": "ts-prod"},
    },
    {
        "realm": "ACCT_SB1",
        "consumer": {"key": "ck", "secret": "cs"},
        "token": {"id": "tk", "secret": "ts"},
    },
]

ACCOUNT_ENTRIES = [
    {"description": "Production", "account": "prod", "url": "https://acct.restlets.example.com/run"},
    {"description": "Sandbox 1", "account": "sb1", "url": "https://acct-sb1.restlets.example.com/run"},
    {"description": "Unconfigured", "account": "other", "url": "https://other.restlets.example.com/run"},
]


class RemoteEndpoint:
    """Mock remote environment that verifies signatures and echoes payloads"""

    def __init__(self, credentials, response=None, status_code=200):
        self.secrets = {
            c.consumer.key: (c.consumer.secret.get_secret_value(), c.token.secret.get_secret_value())
            for c in credentials
        }
        self.response = response
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        header = request.headers.get("Authorization", "")
        payload = json.loads(request.content)

        consumer_key = next(
            (key for key in self.secrets if f'oauth_consumer_key="{key}"' in header), None
        )
        if consumer_key is None:
            return httpx.Response(401, json={"error": {"name": "INVALID_LOGIN", "message": "unknown consumer"}})

        consumer_secret, token_secret = self.secrets[consumer_key]
        if not verify_signature(request.method, str(request.url), header, consumer_secret, token_secret):
            return httpx.Response(401, json={"error": {"name": "INVALID_LOGIN", "message": "bad signature"}})

        body = self.response if self.response is not None else {"echo": payload}
        return httpx.Response(self.status_code, json=body)


@pytest.fixture
def credentials():
    return [Credential.model_validate(entry) for entry in CREDENTIAL_ENTRIES]


@pytest.fixture
def relay_config(credentials):
    return RelayConfig(
        credentials=CredentialStore(credentials),
        accounts=AccountDirectory(RemoteAccountDescriptor.model_validate(e) for e in ACCOUNT_ENTRIES),
    )


@pytest.fixture
def remote(credentials):
    return RemoteEndpoint(credentials)
