"""edp: signed-request dispatch for exchange REST APIs."""

from .errors import (
    BadRequest,
    DeserializationError,
    EdpError,
    ExchangeError,
    NoCredentialSet,
    RemoteError,
    RemoteServerError,
    TransportError,
    UnknownStatus,
    UnsupportedEndpoint,
    UrlError,
)
from .rest import AsyncDispatcher, Credential, Dialect, Dispatcher, Request, RequestDescriptor
from .settings import Settings

__all__ = [
    "AsyncDispatcher",
    "BadRequest",
    "Credential",
    "DeserializationError",
    "Dialect",
    "Dispatcher",
    "EdpError",
    "ExchangeError",
    "NoCredentialSet",
    "RemoteError",
    "RemoteServerError",
    "Request",
    "RequestDescriptor",
    "Settings",
    "TransportError",
    "UnknownStatus",
    "UnsupportedEndpoint",
    "UrlError",
]
