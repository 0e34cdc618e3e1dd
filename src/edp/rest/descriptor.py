"""Declarative request descriptions.

Every endpoint is a pydantic model subclassing :class:`Request` with a class-level
:class:`RequestDescriptor`. The model's fields are the request parameters; the
descriptor is the protocol contract (method, path, signing, response shape) and
never changes at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel

from .signing import to_params

MUTATING_METHODS = frozenset({"POST", "PUT"})


class SigningMode(Enum):
    UNSIGNED = "unsigned"
    QUERY = "query"
    HEADER = "header"


class Dialect(Enum):
    """Exchange signing conventions."""

    BINANCE = ("binance", SigningMode.QUERY, "X-MBX-APIKEY")
    BITMEX = ("bitmex", SigningMode.HEADER, "api-key")

    def __init__(self, label: str, mode: SigningMode, api_key_header: str) -> None:
        self.label = label
        self.mode = mode
        self.api_key_header = api_key_header


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Static metadata for one endpoint."""

    method: str
    endpoint: str
    signed: Dialect | None = None
    has_payload: bool = True
    response_type: Any = Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if not self.endpoint.startswith("/"):
            raise ValueError(f"endpoint must start with '/': {self.endpoint!r}")

    @property
    def signing(self) -> SigningMode:
        if self.signed is None:
            return SigningMode.UNSIGNED
        return self.signed.mode

    @property
    def is_mutating(self) -> bool:
        return self.method in MUTATING_METHODS


class Request(BaseModel):
    """Base class for endpoint requests."""

    descriptor: ClassVar[RequestDescriptor]

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}

    def to_params(self) -> dict[str, str]:
        """Request fields as string parameters, by wire name, ``None`` dropped."""
        return to_params(self.model_dump(by_alias=True, exclude_none=True))

    def to_body(self) -> str:
        """Request fields as a compact JSON document."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
