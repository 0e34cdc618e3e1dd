"""Generic signed-request dispatch layer."""

from .credentials import Credential
from .decoder import decode_response
from .descriptor import Dialect, Request, RequestDescriptor, SigningMode
from .dispatcher import AsyncDispatcher, BaseDispatcher, Dispatcher, PreparedRequest, ProxyConfig
from .signing import canonical_query, decode_query, sign_query

__all__ = [
    "Credential",
    "decode_response",
    "Dialect",
    "Request",
    "RequestDescriptor",
    "SigningMode",
    "AsyncDispatcher",
    "BaseDispatcher",
    "Dispatcher",
    "PreparedRequest",
    "ProxyConfig",
    "canonical_query",
    "decode_query",
    "sign_query",
]
