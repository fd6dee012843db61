"""
Backend Client - Table operations against the hosted REST backend.
Speaks the PostgREST dialect used by Supabase: one resource per table,
equality filters as `column=eq.value` query parameters.
"""
import httpx
import logging
from typing import Optional, List, Dict, Any

from ..config import get_backend_config

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A backend operation failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendClient:
    """Async client for select/insert/update on backend tables."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        config = get_backend_config()
        self.base_url = config["base_url"]
        self.headers = config["headers"]
        self.timeout = config["timeout"]
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _eq_params(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    async def _request(
        self,
        method: str,
        table: str,
        params: Dict[str, str],
        json: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> List[Dict]:
        async with self._client() as client:
            try:
                response = await client.request(
                    method, f"/{table}", params=params, json=json, headers=headers
                )
            except httpx.HTTPError as e:
                raise BackendError(str(e) or "Network request failed") from e

        if response.is_error:
            raise BackendError(self._error_message(response), response.status_code)

        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """PostgREST errors carry a JSON body with a 'message' field."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
        return response.text or f"Backend request failed ({response.status_code})"

    async def select(self, table: str, filters: Optional[Dict[str, Any]] = None) -> List[Dict]:
        """Read all rows of a table matching the equality filters."""
        params = {"select": "*", **self._eq_params(filters)}
        return await self._request("GET", table, params)

    async def insert(self, table: str, rows: List[Dict]) -> List[Dict]:
        """Insert rows and return them as stored."""
        return await self._request(
            "POST", table, {}, json=rows,
            headers={"Prefer": "return=representation"}
        )

    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, Any]
    ) -> List[Dict]:
        """Update rows matching the equality filters and return them."""
        return await self._request(
            "PATCH", table, self._eq_params(filters), json=values,
            headers={"Prefer": "return=representation"}
        )


# Global backend client instance
backend_client: Optional[BackendClient] = None


def get_backend_client() -> BackendClient:
    """Get or create the global backend client."""
    global backend_client
    if backend_client is None:
        backend_client = BackendClient()
    return backend_client
