"""Request signing for the supported dialects.

Query-signed requests (Binance) sign the canonical query string and send that
very string on the wire, so :func:`canonical_query` is the only place a query
string is ever built. Header-signed requests (BitMEX style) sign
``METHOD + PATH + ?QUERY + EXPIRES + BODY`` and carry the result in headers.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from decimal import Decimal
from typing import Any, Mapping
from urllib.parse import parse_qsl, quote, unquote

EXPIRE_GRACE_SECONDS = 5


def format_value(value: Any) -> str:
    """Render a parameter value the way exchanges expect it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        value = Decimal(repr(value))
    if isinstance(value, Decimal):
        text = format(value.normalize(), "f")
        return "0" if text in {"-0", ""} else text
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def to_params(values: Mapping[str, Any]) -> dict[str, str]:
    """Stringify a mapping of parameters, dropping ``None`` values."""
    return {key: format_value(value) for key, value in values.items() if value is not None}


def canonical_query(params: Mapping[str, str]) -> str:
    """Build the deterministic, percent-encoded query string for ``params``.

    Keys are sorted lexicographically. Values are unescaped before escaping so a
    value that arrives already percent-encoded is not encoded twice.
    """
    return "&".join(
        f"{quote(key, safe='')}={quote(unquote(value), safe='')}"
        for key, value in sorted(params.items())
    )


def decode_query(query: str) -> dict[str, str]:
    """Split a query string back into its parameters."""
    return dict(parse_qsl(query, keep_blank_values=True, strict_parsing=bool(query)))


def hmac_sha256_hex(secret: str, message: str) -> str:
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_query(secret: str, params: Mapping[str, str]) -> str:
    """Return ``canonical_query(params)`` with ``&signature=<hex>`` appended."""
    query = canonical_query(params)
    signature = hmac_sha256_hex(secret, query)
    if not query:
        return f"signature={signature}"
    return f"{query}&signature={signature}"


def expires_at(now: float, grace: int = EXPIRE_GRACE_SECONDS) -> int:
    """Expiry timestamp in epoch seconds."""
    return int(now) + grace


def header_sign_message(method: str, path: str, query: str, expires: int, body: str) -> str:
    if query:
        return f"{method.upper()}{path}?{query}{expires}{body}"
    return f"{method.upper()}{path}{expires}{body}"


def sign_headers(
    api_key: str,
    secret: str,
    method: str,
    path: str,
    query: str,
    expires: int,
    body: str,
) -> dict[str, str]:
    """Headers for a header-signed request."""
    message = header_sign_message(method, path, query, expires, body)
    return {
        "api-expires": str(expires),
        "api-key": api_key,
        "api-signature": hmac_sha256_hex(secret, message),
    }
