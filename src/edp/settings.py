from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr


class ProxySettings(BaseModel):
    enabled: bool = False
    url: str | None = None
    username: str | None = None
    password: SecretStr | None = None

    model_config = {"extra": "forbid"}

    def as_dict(self) -> dict[str, Any] | None:
        if not self.enabled or not self.url:
            return None
        return {
            "url": self.url,
            "username": self.username,
            "password": self.password.get_secret_value() if self.password else None,
        }


class HttpSettings(BaseModel):
    timeout: float = Field(default=10.0, gt=0)
    blocking: bool = False

    model_config = {"extra": "forbid"}


class ExchangeCredentials(BaseModel):
    api_key: SecretStr
    api_secret: SecretStr

    model_config = {"extra": "forbid"}


class ExchangeSettings(BaseModel):
    enabled: bool = True
    sandbox: bool = False
    base_url: str | None = None
    credentials: ExchangeCredentials | None = None

    model_config = {"extra": "forbid"}


class Settings(BaseModel):
    env: str = "dev"
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    exchanges: dict[str, ExchangeSettings] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    def redacted(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        for exch in data.get("exchanges", {}).values():
            creds = exch.get("credentials")
            if isinstance(creds, dict):
                if "api_key" in creds:
                    creds["api_key"] = "***"
                if "api_secret" in creds:
                    creds["api_secret"] = "***"
        proxy = data.get("proxy")
        if isinstance(proxy, dict) and proxy.get("password") is not None:
            proxy["password"] = "***"
        return data
