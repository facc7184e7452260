"""Percent-encoding and parameter normalization for OAuth 1.0a signing"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union
from urllib.parse import parse_qsl, quote

ParamValue = Union[str, Sequence[str]]
ParamMap = Mapping[str, ParamValue]


def percent_encode(value: Any) -> str:
    """Percent-encode a value the way OAuth 1.0a requires

    Only the RFC 3986 unreserved characters (ALPHA, DIGIT, '-', '.', '_', '~')
    pass through. Unlike a generic URI component encoder this also escapes
    ! * ' ( ) as %21 %2A %27 %28 %29.

    Args:
        value: Text to encode. Non-string values (e.g. integer timestamps)
               are converted with str() first.

    Returns:
        The encoded string
    """
    if not isinstance(value, str):
        value = str(value)
    return quote(value.encode("utf-8"), safe="~")


def _as_list(value: ParamValue) -> List[str]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def sorted_encode(params: ParamMap) -> List[Tuple[str, str]]:
    """Encode every key and value, then order the pairs

    Pairs are ordered by encoded key. A key carrying several values emits one
    pair per value, with the values ordered by their encoded form, so the
    same multimap always serializes the same way.

    Args:
        params: Mapping of names to a value or a list of values

    Returns:
        Ordered list of (encoded_key, encoded_value) pairs
    """
    encoded: Dict[str, List[str]] = {}
    for key, value in params.items():
        bucket = encoded.setdefault(percent_encode(key), [])
        bucket.extend(percent_encode(item) for item in _as_list(value))

    pairs: List[Tuple[str, str]] = []
    for key in sorted(encoded):
        for item in sorted(encoded[key]):
            pairs.append((key, item))
    return pairs


def join_pairs(pairs: Sequence[Tuple[str, str]]) -> str:
    """Render encoded pairs as key=value&key=value"""
    return "&".join(f"{key}={value}" for key, value in pairs)


def merge_params(*sources: ParamMap) -> Dict[str, List[str]]:
    """Merge parameter maps into one multimap, keeping every value"""
    merged: Dict[str, List[str]] = {}
    for source in sources:
        for key, value in source.items():
            merged.setdefault(key, []).extend(_as_list(value))
    return merged


def parse_query(url: str) -> Dict[str, List[str]]:
    """Extract the query string parameters of a URL

    The fragment is ignored, blank values are kept and repeated names are
    collected in order.
    """
    url = url.split("#", 1)[0]
    if "?" not in url:
        return {}
    query = url.split("?", 1)[1]

    params: Dict[str, List[str]] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(key, []).append(value)
    return params
