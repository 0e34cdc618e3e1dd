"""Base class for exchange clients."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable

from ..rest.credentials import Credential
from ..rest.descriptor import Request
from ..rest.dispatcher import AsyncDispatcher, BaseDispatcher, Dispatcher, ProxyConfig

logger = logging.getLogger(__name__)


async def _convert_async(result: Awaitable[Any], convert: Callable[[Any], Any]) -> Any:
    return convert(await result)


class BaseExchangeClient:
    """Endpoint wrapper over a blocking or async dispatcher."""

    name = "base"
    base_url = "https://api.example.com"
    sandbox_url: str | None = None

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        *,
        sandbox: bool = False,
        base_url: str | None = None,
        blocking: bool = False,
        timeout: float = 10.0,
        proxy: ProxyConfig | None = None,
        dispatcher: BaseDispatcher | None = None,
    ):
        """Initialize exchange client.

        Args:
            api_key: API key (optional; public endpoints work without it)
            api_secret: API secret
            sandbox: Use sandbox/testnet environment
            base_url: Override the REST host
            blocking: Use the blocking ``requests`` transport instead of ``aiohttp``
            timeout: Per-request timeout in seconds
            proxy: Proxy configuration
            dispatcher: Pre-built dispatcher; other transport options are ignored
        """
        self.sandbox = sandbox
        if dispatcher is None:
            credential = None
            if api_key or api_secret:
                credential = Credential(api_key or "", api_secret or "")
            dispatcher_cls = Dispatcher if blocking else AsyncDispatcher
            dispatcher = dispatcher_cls(
                base_url or self.get_base_url(),
                credential,
                timeout=timeout,
                proxy=proxy,
            )
        self.dispatcher = dispatcher

    @property
    def is_async(self) -> bool:
        return isinstance(self.dispatcher, AsyncDispatcher)

    def get_base_url(self) -> str:
        if self.sandbox and self.sandbox_url:
            return self.sandbox_url
        return self.base_url

    def _call(self, request: Request, convert: Callable[[Any], Any] | None = None) -> Any:
        result = self.dispatcher.dispatch(request)
        if convert is None:
            return result
        if inspect.isawaitable(result):
            return _convert_async(result, convert)
        return convert(result)

    def close(self) -> Any:
        """Close the underlying HTTP session."""
        return self.dispatcher.close()
