"""
Remote account listing. Exposes routing metadata only, never credentials.
"""
from typing import List

from fastapi import APIRouter, Request

from ..errors import InvalidUrlError
from ..models import AccountSummary
from ..realm import resolve_realm
from ..runtime import RelayConfig

router = APIRouter()


def summarize_accounts(config: RelayConfig) -> List[AccountSummary]:
    """Account descriptors annotated with their derived realm"""
    summaries = []
    for descriptor in config.accounts:
        try:
            realm = resolve_realm(descriptor.url)
        except InvalidUrlError:
            realm = None
        summaries.append(AccountSummary(
            description=descriptor.description,
            account=descriptor.account,
            url=descriptor.url,
            realm=realm,
        ))
    return summaries


@router.get("/v1/accounts", response_model=List[AccountSummary])
async def list_accounts(request: Request):
    """List the configured remote accounts"""
    return summarize_accounts(request.app.state.relay_config)
