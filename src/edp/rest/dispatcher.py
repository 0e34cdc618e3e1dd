"""HTTP dispatch for declarative requests.

:class:`Dispatcher` blocks on ``requests``; :class:`AsyncDispatcher` awaits on
``aiohttp``. Both build the outgoing call through :meth:`BaseDispatcher.prepare`
and decode through :func:`~edp.rest.decoder.decode_response`, so signing and
decoding are identical in both modes.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import aiohttp
import requests
from yarl import URL

from ..errors import DeserializationError, NoCredentialSet, TransportError, UrlError
from .credentials import Credential
from .decoder import decode_response
from .descriptor import Request, SigningMode
from .signing import canonical_query, expires_at, sign_headers, sign_query

logger = logging.getLogger(__name__)

USER_AGENT = "edp/0.1"


class ProxyConfig:
    """HTTP proxy configuration."""

    def __init__(self, url: str | None = None, username: str | None = None, password: str | None = None):
        self.url = url
        self.username = username
        self.password = password

    @property
    def proxy_url(self) -> str | None:
        if not self.url:
            return None
        if self.username and self.password:
            protocol = self.url.split("://")[0] if "://" in self.url else "http"
            rest = self.url.split("://")[1] if "://" in self.url else self.url
            return f"{protocol}://{self.username}:{self.password}@{rest}"
        return self.url


@dataclass(slots=True)
class PreparedRequest:
    """The exact method, URL, headers and body to put on the wire."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


class BaseDispatcher:
    """Request preparation shared by the blocking and async dispatchers."""

    def __init__(
        self,
        base_url: str,
        credential: Credential | None = None,
        *,
        timeout: float = 10.0,
        proxy: ProxyConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.base_url = base_url.rstrip("/")
        self.credential = credential
        self.timeout = timeout
        self.proxy = proxy or ProxyConfig()
        self.clock = clock

    @classmethod
    def with_credential(cls, base_url: str, api_key: str, secret_key: str, **kwargs: Any):
        return cls(base_url, Credential(api_key, secret_key), **kwargs)

    def check_credential(self) -> Credential:
        if self.credential is None:
            raise NoCredentialSet()
        return self.credential

    def _join_url(self, endpoint: str) -> URL:
        candidate = f"{self.base_url}{endpoint}"
        try:
            url = URL(candidate)
        except (TypeError, ValueError) as exc:
            raise UrlError(candidate, str(exc)) from exc
        if url.scheme not in {"http", "https"} or not url.host:
            raise UrlError(candidate)
        return url

    def prepare(self, request: Request) -> PreparedRequest:
        """Build the outgoing call for ``request``, signing it when required."""
        desc = type(request).descriptor
        url = self._join_url(desc.endpoint)
        method = desc.method
        body = request.to_body() if desc.is_mutating and desc.has_payload else ""
        headers = {"User-Agent": USER_AGENT}
        query = ""

        mode = desc.signing
        if mode is SigningMode.UNSIGNED:
            if desc.has_payload and not desc.is_mutating:
                query = canonical_query(request.to_params())

        elif mode is SigningMode.QUERY:
            cred = self.check_credential()
            params = request.to_params() if desc.has_payload else {}
            if "timestamp" not in params:
                params["timestamp"] = str(int(self.clock() * 1000))
            query = sign_query(cred.secret_key, params)
            headers[desc.signed.api_key_header] = cred.api_key
            body = ""

        elif mode is SigningMode.HEADER:
            cred = self.check_credential()
            if desc.has_payload and not desc.is_mutating:
                query = canonical_query(request.to_params())
            expires = expires_at(self.clock())
            headers.update(
                sign_headers(cred.api_key, cred.secret_key, method, url.path, query, expires, body)
            )

        if body:
            headers["content-type"] = "application/json"
        full_url = str(url)
        if query:
            full_url = f"{full_url}?{query}"
        return PreparedRequest(method=method, url=full_url, headers=headers, body=body)

    def _decode(self, request: Request, status: int, raw: bytes) -> Any:
        desc = type(request).descriptor
        logger.debug("%s %s -> HTTP %s", desc.method, desc.endpoint, status)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            text = raw.decode("utf-8", errors="replace")
            if 200 <= status < 300:
                logger.error("response body of %s %s is not UTF-8", desc.method, desc.endpoint)
                raise DeserializationError(text, detail=str(exc)) from exc
        return decode_response(status, text, desc.response_type)


class Dispatcher(BaseDispatcher):
    """Blocking dispatcher backed by a ``requests.Session``."""

    def __init__(self, base_url: str, credential: Credential | None = None, **kwargs: Any):
        super().__init__(base_url, credential, **kwargs)
        self.session: requests.Session | None = None

    def _ensure_session(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
            if self.proxy.proxy_url:
                self.session.proxies = {"http": self.proxy.proxy_url, "https": self.proxy.proxy_url}
        return self.session

    def dispatch(self, request: Request) -> Any:
        prepared = self.prepare(request)
        session = self._ensure_session()
        try:
            resp = session.request(
                prepared.method,
                prepared.url,
                headers=prepared.headers,
                data=prepared.body.encode("utf-8") if prepared.body else None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{prepared.method} {type(request).descriptor.endpoint} failed: {exc}") from exc
        return self._decode(request, resp.status_code, resp.content)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncDispatcher(BaseDispatcher):
    """Async dispatcher backed by an ``aiohttp.ClientSession``."""

    def __init__(self, base_url: str, credential: Credential | None = None, **kwargs: Any):
        super().__init__(base_url, credential, **kwargs)
        self.session: aiohttp.ClientSession | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            connector = aiohttp.TCPConnector()
            self.session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    async def dispatch(self, request: Request) -> Any:
        prepared = self.prepare(request)
        session = await self._ensure_session()
        try:
            async with session.request(
                prepared.method,
                URL(prepared.url, encoded=True),
                headers=prepared.headers,
                data=prepared.body.encode("utf-8") if prepared.body else None,
                proxy=self.proxy.proxy_url,
            ) as resp:
                raw = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"{prepared.method} {type(request).descriptor.endpoint} failed: {exc}") from exc
        return self._decode(request, status, raw)

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "AsyncDispatcher":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
