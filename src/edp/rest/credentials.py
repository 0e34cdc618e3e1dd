"""API credential holder."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credential:
    """API key and secret pair; immutable once created."""

    api_key: str
    secret_key: str

    def __post_init__(self) -> None:
        if not self.api_key or not self.secret_key:
            raise ValueError("api_key and secret_key must be non-empty")

    def __repr__(self) -> str:
        return f"Credential(api_key='{self.api_key[:4]}***', secret_key='***')"
