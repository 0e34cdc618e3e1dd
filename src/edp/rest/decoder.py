"""Map HTTP status and body to a typed value or a typed error."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..errors import (
    BadRequest,
    DeserializationError,
    RemoteError,
    RemoteServerError,
    UnknownStatus,
)

logger = logging.getLogger(__name__)


class ExchangeErrorMessage(BaseModel):
    code: int
    message: str = Field(alias="msg")


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def decode_response(status: int, body: str, response_type: Any = Any) -> Any:
    """Decode ``body`` into ``response_type`` or raise the matching error."""
    if 200 <= status < 300:
        try:
            return _adapter(response_type).validate_json(body)
        except ValidationError as exc:
            logger.error("cannot deserialize '%s'", body)
            raise DeserializationError(body, detail=str(exc)) from exc

    if status == 400:
        try:
            err = ExchangeErrorMessage.model_validate_json(body)
        except ValidationError as exc:
            raise BadRequest(body) from exc
        raise RemoteError(err.code, err.message)

    if 500 <= status < 600:
        raise RemoteServerError(status)

    raise UnknownStatus(status, body)
