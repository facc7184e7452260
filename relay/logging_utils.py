"""
Logging utilities for outbound request tracing.
"""
import logging
from typing import Dict

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "x-api-key", "api-key", "cookie"}


def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of `headers` with credential-bearing values replaced"""
    return {
        name: "[REDACTED]" if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def log_outbound_request(request_id: str, url: str, headers: Dict[str, str]):
    """Log an outbound signed request without exposing its credentials"""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(f"[{request_id}] POST {url}")
    for header_name, header_value in redact_headers(headers).items():
        logger.debug(f"[{request_id}] {header_name}: {header_value}")
