"""
gitaccess logging utilities.

Request and response traffic goes to the ``gitaccess.http`` logger at DEBUG.
Everything passed through here is redacted first: credential headers,
credential-looking JSON fields, bearer tokens and private key blocks.
"""

import json
import logging
import re
from typing import Any

_sdk_logger = logging.getLogger("gitaccess")
_http_logger = logging.getLogger("gitaccess.http")

_REDACTED = "[REDACTED]"

# Substrings of header or field names whose values are never logged
_SENSITIVE_KEYS = frozenset({"authorization", "token", "password", "secret", "api_key"})

# Applied to the final log line, for credentials embedded in free text
_TEXT_REDACTIONS = [
    (re.compile(r"\b(Bearer|Basic)\s+[A-Za-z0-9\-._~+/=]+", re.IGNORECASE), r"\1 " + _REDACTED),
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: " + _REDACTED),
    (re.compile(r"-----BEGIN[^-]*PRIVATE KEY-----.*?-----END[^-]*PRIVATE KEY-----", re.DOTALL), "[PRIVATE_KEY_REDACTED]"),
]

# Response bodies longer than this are cut in the log line
_MAX_BODY_CHARS = 2000


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Attach a handler to the ``gitaccess`` logger and set its levels.

    Args:
        level: Level for the ``gitaccess`` logger
        http_level: Level for ``gitaccess.http``; DEBUG shows request and
            response lines (default: same as ``level``)
        handler: Handler to attach (default: StreamHandler to stderr)
        format_string: Record format (default: time, logger, level, message)
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    _sdk_logger.addHandler(handler)
    _sdk_logger.setLevel(level)
    _http_logger.setLevel(level if http_level is None else http_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``gitaccess`` logger, or its child ``gitaccess.<name>``."""
    return _sdk_logger if name is None else _sdk_logger.getChild(name)


def mask_sensitive_data(text: str) -> str:
    """Redact bearer tokens, ``token="..."`` style pairs and private keys in ``text``."""
    for pattern, replacement in _TEXT_REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Copy ``data`` with the values of sensitive keys replaced, at any depth.

    A key is sensitive when its lowercase form contains one of
    ``sensitive_keys`` (default: authorization, token, password, secret, api_key).
    """
    keys = _SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys
    return {
        key: _REDACTED if any(k in key.lower() for k in keys) else _redact_value(value, keys)
        for key, value in data.items()
    }


def _redact_value(value: Any, keys: set[str] | frozenset[str]) -> Any:
    if isinstance(value, dict):
        return safe_log_dict(value, set(keys))
    if isinstance(value, list):
        return [_redact_value(item, keys) for item in value]
    return value


def _loggable_body(body: Any) -> Any:
    """Decode a raw body so credential fields inside JSON can be redacted."""
    if isinstance(body, bytes):
        try:
            body = json.loads(body)
        except ValueError:
            return body.decode("utf-8", errors="replace")[:_MAX_BODY_CHARS]
    if isinstance(body, (dict, list)):
        return _redact_value(body, _SENSITIVE_KEYS)
    return body


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: Any = None,
) -> None:
    """
    Log an outgoing request at DEBUG.

    Args:
        method: HTTP method
        url: Full request URL
        headers: Headers as sent, including Authorization (redacted here)
        body: Raw bytes or decoded JSON
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    line = f"{method} {url}"
    if headers:
        line += f" | headers={safe_log_dict(headers)}"
    if body:
        line += f" | body={_loggable_body(body)}"
    _http_logger.debug(mask_sensitive_data(line))


def log_http_response(
    status_code: int,
    url: str,
    body: Any = None,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log a received response at DEBUG.

    Args:
        status_code: HTTP status
        url: Request URL
        body: Raw bytes or decoded JSON
        elapsed_ms: Time from send to fully read body
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    line = f"Response {status_code} from {url}"
    if elapsed_ms is not None:
        line += f" | elapsed={elapsed_ms:.2f}ms"
    if body:
        line += f" | body={_loggable_body(body)}"
    _http_logger.debug(mask_sensitive_data(line))


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
]
