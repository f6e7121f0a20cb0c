"""
Blog Backend: Hosted REST Data Store Client
=============================================

What:  DataStore implementation speaking the hosted service's REST dialect
       (PostgREST, as exposed by Supabase under `/rest/v1`).
How:   One long-lived httpx.AsyncClient with the access key baked into its
       default headers. Each select/insert is an independent HTTPS call.
Who:   Built once in the application lifespan; shared by all requests.

Wire format:
    SELECT  GET  /rest/v1/<table>?select=*&<column>=eq.<value>
    INSERT  POST /rest/v1/<table>   body: JSON array of rows
                                    Prefer: return=representation
    ERROR   non-2xx with {"code", "details", "hint", "message"}

No retries: a failed call is reported once as DataStoreError. Timeouts come
from the httpx client configuration and surface the same way.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx

from blog_api.exceptions import DataStoreError
from blog_api.services.store_base import DataStore

logger = logging.getLogger(__name__)


class RestDataStore(DataStore):
    """
    PostgREST client over httpx.

    Args:
        url:       Project base URL, e.g. https://abc.supabase.co
        key:       Access key sent as `apikey` and as a Bearer token
        timeout:   Transport timeout in seconds
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    backend_name = "rest"

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        logger.info("RestDataStore initialized for %s", self.base_url)

    async def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        params = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"

        response = await self._send("GET", table, params=params)
        return self._rows(response, table)

    async def insert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
    ) -> List[Dict[str, Any]]:
        response = await self._send(
            "POST",
            table,
            json=[dict(row) for row in rows],
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response, table)

    async def health_check(self) -> bool:
        # The schema root answers any authenticated GET; 4xx still proves reachability
        try:
            response = await self._client.get("/")
        except httpx.HTTPError as e:
            logger.warning("Data Store health check failed: %s", str(e) or type(e).__name__)
            return False
        return response.status_code < 500

    async def close(self) -> None:
        await self._client.aclose()

    # ── Internals ─────────────────────────────────────────────────────────

    async def _send(self, method: str, table: str, **kwargs) -> httpx.Response:
        """Issue one request; translate every failure into DataStoreError."""
        try:
            response = await self._client.request(method, f"/{table}", **kwargs)
        except httpx.HTTPError as e:
            raise DataStoreError(
                message=str(e) or type(e).__name__,
                table=table,
                context={"method": method, "error_type": type(e).__name__},
            ) from e

        if response.is_error:
            raise DataStoreError(
                message=self._error_message(response),
                table=table,
                context={"method": method, "status": response.status_code},
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """PostgREST puts the human-readable reason in `message`."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text or response.reason_phrase or f"HTTP {response.status_code}"

    @staticmethod
    def _rows(response: httpx.Response, table: str) -> List[Dict[str, Any]]:
        # return=minimal and 204 responses carry no body
        if not response.content:
            return []
        try:
            body = response.json()
        except ValueError as e:
            raise DataStoreError(
                message="Data Store returned a non-JSON response",
                table=table,
                context={"status": response.status_code},
            ) from e
        if isinstance(body, dict):
            return [body]
        return list(body)
