"""
Pydantic models for relay configuration entries and the HTTP surface.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator, model_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ConsumerCredential(_Frozen):
    """Consumer key/secret of the calling integration"""
    key: str
    secret: SecretStr

    @field_validator("key")
    @classmethod
    def _key_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("consumer key must not be empty")
        return value


class TokenCredential(_Frozen):
    """Token id/secret of the acting principal"""
    id: str
    secret: SecretStr

    @field_validator("id")
    @classmethod
    def _id_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("token id must not be empty")
        return value


class Credential(_Frozen):
    """One realm's consumer/token pair"""
    realm: str
    consumer: ConsumerCredential
    token: TokenCredential

    @field_validator("realm")
    @classmethod
    def _realm_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("realm must not be empty")
        return value


class RemoteAccountDescriptor(_Frozen):
    """Display/routing metadata of a remote environment"""
    description: str
    account: str
    url: str


class RelayRequest(BaseModel):
    """Body of POST /v1/relay"""
    url: Optional[str] = None
    account: Optional[str] = None
    payload: Dict[str, Any]

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "RelayRequest":
        if (self.url is None) == (self.account is None):
            raise ValueError("exactly one of 'url' or 'account' is required")
        return self


class AccountSummary(BaseModel):
    """Entry of GET /v1/accounts"""
    description: str
    account: str
    url: str
    realm: Optional[str] = None
