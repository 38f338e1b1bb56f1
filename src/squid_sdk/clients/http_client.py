"""
Squid API HTTP Client

Provides an httpx-based client for the two Squid API endpoints the SDK
consumes: the SDK metadata (chains and tokens) and route quotes.
"""

from typing import Any, Dict, Union

import httpx

from ..schemas.routes import Route, RouteRequest
from ..logger import get_logger

logger = get_logger(__name__)


class SquidApiClient(httpx.AsyncClient):
    """
    Extended httpx.AsyncClient bound to a Squid API host.

    Fully compatible with httpx.AsyncClient - supports all methods, properties,
    and can be used as an async context manager.

    Usage:
        ```python
        async with SquidApiClient(base_url="https://api.0xsquid.com") as client:
            info = await client.get_sdk_info()
            route = await client.get_route(request)
        ```
    """

    SDK_INFO_PATH = "/api/sdk-info"
    ROUTE_PATH = "/api/route"

    def __init__(self, base_url: str, **kwargs):
        """
        Initialize client for a Squid API host.

        Args:
            base_url: API host (e.g. "https://api.0xsquid.com")
            **kwargs: All standard httpx.AsyncClient arguments (timeout, transport, etc.)
        """
        super().__init__(base_url=base_url.rstrip("/"), **kwargs)

    async def get_sdk_info(self) -> Dict[str, Any]:
        """
        Fetch chain and token metadata.

        Returns:
            Dict[str, Any]: ``{"chains": [...], "tokens": [...]}``

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            KeyError: Response without a ``data`` envelope
        """
        response = await self.get(self.SDK_INFO_PATH)
        response.raise_for_status()
        data = response.json()["data"]
        return {"chains": data["chains"], "tokens": data["tokens"]}

    async def get_route(self, request: Union[RouteRequest, Dict[str, Any]]) -> Route:
        """
        Request a route quote.

        Args:
            request: Route query as a RouteRequest or a camelCase / snake_case dict

        Returns:
            Route: Parsed route

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            pydantic.ValidationError: Response route does not match the schema
        """
        if not isinstance(request, RouteRequest):
            request = RouteRequest.model_validate(request)

        logger.debug("Requesting route %s", request.to_wire())
        response = await self.get(self.ROUTE_PATH, params=request.to_wire())
        response.raise_for_status()
        return Route.model_validate(response.json()["route"])
