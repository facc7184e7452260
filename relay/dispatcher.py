"""
Request dispatcher: resolves the realm of a target URL, signs a POST with the
matching credential and relays the JSON response.
"""
import json
import logging
import uuid
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from oauth1 import Consumer, OAuth1Signer, OAuthConfig, SignableRequest, SignatureMethod, Token

from .errors import RelayError, SigningError, TransportError
from .logging_utils import log_outbound_request
from .models import Credential
from .realm import resolve_realm
from .runtime import RelayConfig

logger = logging.getLogger(__name__)


class DispatchState(str, Enum):
    """Stages of one dispatch, in order"""
    RESOLVING = "resolving"
    LOOKING_UP = "looking_up"
    SIGNING = "signing"
    SENDING = "sending"
    PARSING = "parsing"


class RequestDispatcher:
    """Authenticated relay of JSON payloads to realm-specific endpoints"""

    def __init__(self, config: RelayConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            config: Immutable runtime configuration
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.config = config
        self.transport = transport

    async def send(self, url: str, payload: Any, request_id: Optional[str] = None) -> Any:
        """Sign and POST `payload` to `url`, returning the parsed JSON response

        Raises:
            InvalidUrlError: URL has no realm label
            CredentialNotFoundError: No credential for the resolved realm
            SigningError: Signature computation failed
            TransportError: Network failure, timeout, enforced status or bad JSON
        """
        request_id = request_id or str(uuid.uuid4())[:8]

        self._enter(DispatchState.RESOLVING, request_id)
        realm = resolve_realm(url)

        self._enter(DispatchState.LOOKING_UP, request_id, realm=realm)
        credential = self.config.credentials.find(realm)

        self._enter(DispatchState.SIGNING, request_id, realm=realm)
        headers = self._sign(url, realm, credential)
        headers["Content-Type"] = "application/json"

        self._enter(DispatchState.SENDING, request_id)
        response = await self._post(url, payload, headers, request_id)

        self._enter(DispatchState.PARSING, request_id)
        return self._parse(response, request_id)

    async def dispatch(self, url: str, payload: Any, request_id: Optional[str] = None) -> Any:
        """Like send(), but failures come back as {"error": {"kind", "message"}}"""
        try:
            return await self.send(url, payload, request_id)
        except RelayError as e:
            logger.warning(f"[{request_id or '-'}] Dispatch failed ({e.kind}): {e.message}")
            return e.to_dict()

    async def send_to_account(self, account: str, payload: Any, request_id: Optional[str] = None) -> Any:
        """send() to the URL of a configured remote account"""
        descriptor = self.config.accounts.find(account)
        return await self.send(descriptor.url, payload, request_id)

    async def dispatch_to_account(self, account: str, payload: Any, request_id: Optional[str] = None) -> Any:
        """dispatch() to the URL of a configured remote account"""
        try:
            return await self.send_to_account(account, payload, request_id)
        except RelayError as e:
            logger.warning(f"[{request_id or '-'}] Dispatch failed ({e.kind}): {e.message}")
            return e.to_dict()

    def _enter(self, state: DispatchState, request_id: str, realm: Optional[str] = None):
        suffix = f" (realm={realm})" if realm else ""
        logger.debug(f"[{request_id}] {state.name}{suffix}")

    def _sign(self, url: str, realm: str, credential: Credential) -> Dict[str, str]:
        try:
            signer = OAuth1Signer(OAuthConfig(
                consumer=Consumer(
                    key=credential.consumer.key,
                    secret=credential.consumer.secret.get_secret_value(),
                ),
                signature_method=SignatureMethod.HMAC_SHA256,
                realm=realm,
                nonce_length=self.config.nonce_length,
            ))
            token = Token(key=credential.token.id, secret=credential.token.secret.get_secret_value())
            # JSON body is not form-encoded, so only oauth params and the URL query are signed
            request = SignableRequest(method="POST", url=url)
            return signer.to_header(signer.authorize(request, token))
        except Exception as e:
            raise SigningError(f"Failed to sign request for realm {realm}: {type(e).__name__}") from e

    async def _post(self, url: str, payload: Any, headers: Dict[str, str], request_id: str) -> httpx.Response:
        log_outbound_request(request_id, url, headers)

        timeout = httpx.Timeout(self.config.request_timeout, connect=self.config.connect_timeout)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {url} timed out") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL (e.g. bad port) is not an HTTPError subclass
            raise TransportError(f"Request to {url} failed: {type(e).__name__}") from e

        logger.debug(f"[{request_id}] Remote response status: {response.status_code}")

        if self.config.enforce_http_status and not response.is_success:
            raise TransportError(f"Remote endpoint returned HTTP {response.status_code}")

        return response

    def _parse(self, response: httpx.Response, request_id: str) -> Any:
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(
                f"Remote endpoint returned a non-JSON body (HTTP {response.status_code})"
            ) from e

        if isinstance(data, dict) and "error" in data:
            logger.info(f"[{request_id}] Remote endpoint reported an error; relaying as-is")
        return data
