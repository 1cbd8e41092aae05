from __future__ import annotations

import logging
import socket

import requests

from healthchecker.checks.results import CheckResult, utcnow

logger = logging.getLogger(__name__)

DNS_ERROR_MARKERS = (
    "Failed to resolve",
    "Name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "Temporary failure in name resolution",
)


def _is_dns_failure(exc: BaseException) -> bool:
    # requests wraps urllib3 errors, which wrap the socket error; walk the chain.
    seen: set[int] = set()
    stack: list[BaseException | None] = [exc]
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        if type(current).__name__ == "NameResolutionError":
            return True
        stack.append(current.__cause__)
        stack.append(current.__context__)
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            stack.append(reason)
        stack.extend(arg for arg in current.args if isinstance(arg, BaseException))
    text = str(exc)
    return any(marker in text for marker in DNS_ERROR_MARKERS)


def classify_error(exc: BaseException) -> str:
    """Map a probe exception to a short machine-readable category."""
    if isinstance(exc, requests.Timeout):
        return "timeout"
    if isinstance(exc, requests.exceptions.SSLError):
        return "ssl_error"
    if isinstance(exc, requests.ConnectionError):
        if _is_dns_failure(exc):
            return "dns_error"
        return "connection_error"
    if isinstance(
        exc,
        (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
        ),
    ):
        return "invalid_url"
    if isinstance(
        exc,
        (
            requests.exceptions.ChunkedEncodingError,
            requests.exceptions.ContentDecodingError,
        ),
    ):
        return "protocol_error"
    return exc.__class__.__name__


def run_http(url: str, timeout_s: float) -> CheckResult:
    try:
        r = requests.get(url, timeout=(timeout_s, timeout_s), allow_redirects=False)
    except Exception as e:
        error = classify_error(e)
        logger.warning("Check failed for %s: %s (%s)", url, error, e)
        return CheckResult(url=url, up=False, error=error, last_checked=utcnow())

    return CheckResult(
        url=url,
        up=r.status_code == 200,
        status_code=r.status_code,
        last_checked=utcnow(),
    )
