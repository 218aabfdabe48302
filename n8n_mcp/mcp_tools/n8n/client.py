"""HTTP client for the n8n REST API.

Handles API-key authentication and provides the verb helpers every
n8n tool uses. All paths are relative to ``{N8N_URL}/api/v1``.
"""

import json
from typing import Any, Dict, Optional

import httpx

from ...config import get_settings
from ...logging_config import get_logger

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


class N8nError(Exception):
    """Base class for n8n client errors."""
    pass


class N8nConnectionError(N8nError):
    """Failed to reach the n8n server (connection error, timeout)."""
    pass


class N8nAPIError(N8nError):
    """n8n answered with an HTTP error status."""

    def __init__(self, status_code: int, body: Any):
        rendered = body if isinstance(body, str) else json.dumps(body)
        super().__init__(f"n8n API error: {status_code} - {rendered}")
        self.status_code = status_code
        self.body = body


class N8nClient:
    """Async client for the n8n public REST API.

    Usage:
        async with N8nClient() as client:
            workflows = await client.get("/workflows", params={"active": True})
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the client.

        Args:
            base_url: n8n URL without /api/v1 (defaults to config)
            api_key: n8n API key (defaults to config)
            timeout: Request timeout in seconds (defaults to config)
        """
        settings = get_settings()

        self.base_url = (base_url or settings.n8n_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.n8n_api_key
        self.timeout = timeout or settings.n8n_timeout

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "N8nClient":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def api_url(self) -> str:
        """Base URL of the REST API."""
        return f"{self.base_url}{API_PREFIX}"

    def _ensure_client(self) -> httpx.AsyncClient:
        """Create HTTP client if not exists."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                timeout=self.timeout,
                headers={
                    "X-N8N-API-KEY": self.api_key,
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Any = None,
    ) -> Any:
        """Make an API request and decode the JSON response.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: Path relative to /api/v1 (e.g. "/workflows")
            params: Query parameters; None values are dropped
            json_data: Optional JSON body

        Returns:
            Decoded JSON body, raw text for non-JSON bodies, None if empty

        Raises:
            N8nAPIError: If n8n returns a 4xx/5xx status
            N8nConnectionError: If the request cannot be completed
        """
        client = self._ensure_client()
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug(f"n8n request: {method} {path}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params or None,
                json=json_data,
            )
        except httpx.RequestError as e:
            logger.warning(f"n8n request failed: {method} {path}: {e}")
            raise N8nConnectionError(str(e)) from e

        if response.status_code >= 400:
            error = N8nAPIError(response.status_code, self._decode(response))
            logger.warning(f"n8n request failed: {method} {path}: {error}")
            raise error

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        """POST request."""
        return await self.request("POST", path, json_data=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        """PATCH request."""
        return await self.request("PATCH", path, json_data=json)

    async def delete(self, path: str) -> Any:
        """DELETE request."""
        return await self.request("DELETE", path)


# Shared client, built once per process
_client: Optional[N8nClient] = None


def get_client() -> N8nClient:
    """Get the shared n8n client, creating it from settings on first use."""
    global _client
    if _client is None:
        _client = N8nClient()
    return _client


def set_client(client: Optional[N8nClient]) -> None:
    """Replace the shared client."""
    global _client
    _client = client


async def close_client() -> None:
    """Close and discard the shared client."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
