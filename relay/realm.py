"""
Realm resolution: maps a target URL to the realm key of its credential.
"""
import re

from .errors import InvalidUrlError

# https://<first host label>.<rest>
_HOST_LABEL = re.compile(r"^https://([^./?#]+)\.")


def resolve_realm(url: str) -> str:
    """Derive the realm key from the first host label of an https URL

    https://1337-sb1.restlets.example.com/app -> 1337_SB1

    Raises:
        InvalidUrlError: If the URL is not https://<label>.<rest>
    """
    if not isinstance(url, str):
        raise InvalidUrlError("Target URL must be a string")

    match = _HOST_LABEL.match(url)
    if not match:
        raise InvalidUrlError(f"Cannot derive a realm from URL: {url}")

    return match.group(1).replace("-", "_").upper()
