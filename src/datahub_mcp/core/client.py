from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from .observability import elapsed_ms, log_event
from .query import RootQuery

DEFAULT_HOST = "www.wrike.com"
APP_PATH = "/app/wrike_v2_web"
QUERY_PATH = "/platform/api/v1/query"
PUBLIC_API_PATH = "/public/api/v1"
USER_AGENT = "Datahub-MCP/1.0.0"


class DatahubClientError(Exception):
    """Base error for client failures."""


class DatahubHTTPError(DatahubClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        operation: str,
        reason: str,
        detail: Optional[str] = None,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        message = f"Failed to {operation}: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.operation = operation
        self.reason = reason
        self.detail = detail
        self.response_json = response_json
        self.response_text = response_text


class DatahubParseError(DatahubClientError):
    pass


class DatahubValidationError(DatahubClientError, ValueError):
    """Raised before any network call when a required argument is missing or malformed."""  # noqa: E501


class DatahubNotFoundError(DatahubClientError):
    """The query succeeded but the requested entity is not in the response."""


class DatahubPartialCreateError(DatahubClientError):
    """
    create_database stopped at a field. The database and the fields listed in
    ``fields`` exist upstream and were not rolled back.
    """

    def __init__(
        self,
        *,
        database: Dict[str, Any],
        fields: list[Dict[str, Any]],
        failed_field: str,
        cause: Exception,
    ):
        created = ", ".join(str(f.get("id")) for f in fields) or "none"
        super().__init__(
            f"Database {database.get('id')} was created, fields created: {created}; "
            f"failed to create field {failed_field!r}: {cause}. "
            "Created items were not rolled back."
        )
        self.database = database
        self.fields = fields
        self.failed_field = failed_field
        self.cause = cause


def build_base_url(host: str) -> str:
    host = (host or DEFAULT_HOST).strip().rstrip("/")
    if host.startswith(("http://", "https://")):
        return f"{host}{APP_PATH}"
    return f"https://{host}{APP_PATH}"


class DatahubClient:
    """
    Shared HTTP client for the DataHub public REST API and the internal query API.
    - Handles auth, base URL, client identification headers, timeouts
    - One request per call: no retries, no caching
    - Returns raw dict payloads; tools own reshaping and domain decisions
    """

    def __init__(
        self,
        *,
        token: str,
        host: str = DEFAULT_HOST,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        token = (token or "").strip()
        if not token:
            raise ValueError("token must be provided.")

        self.host = host or DEFAULT_HOST
        self.base_url = build_base_url(self.host)
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("datahub_mcp.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
                "X-MCP-Client": "true",
            },
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "DatahubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Core request method.
        - Raises DatahubHTTPError on non-2xx HTTP responses
        - Raises DatahubClientError on network/timeout errors (never retried)
        - Raises DatahubParseError if the response isn't a JSON object
        - Returns parsed JSON dict on success ({} for empty bodies)
        """
        method = method.upper()
        start = time.perf_counter()

        try:
            resp = await self.http.request(method, url, params=params, json=json)
        except httpx.HTTPError as exc:
            log_event(
                "op_call",
                logger=self.log,
                operation=operation,
                method=method,
                endpoint=url,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=elapsed_ms(start),
            )
            raise DatahubClientError(
                f"Failed to {operation}: {type(exc).__name__} calling {method} {url}"
            ) from exc

        log_event(
            "op_call",
            logger=self.log,
            operation=operation,
            method=method,
            endpoint=url,
            status=resp.status_code,
            duration_ms=elapsed_ms(start),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=method, operation=operation)

        return self._safe_json(resp)

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise DatahubParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise DatahubParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(
        self, resp: httpx.Response, *, method: str, operation: str
    ) -> DatahubHTTPError:
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        detail: Optional[str] = None

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                detail = parsed.get("errorDescription") or parsed.get("message")
        except ValueError:
            response_text = (resp.text or "")[:500]

        return DatahubHTTPError(
            status_code=resp.status_code,
            method=method,
            url=str(resp.request.url),
            operation=operation,
            reason=resp.reason_phrase or str(resp.status_code),
            detail=detail if isinstance(detail, str) else None,
            response_json=response_json,
            response_text=response_text,
        )

    async def get(
        self,
        url: str,
        *,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.request("GET", url, params=params, operation=operation)

    async def post(
        self, url: str, *, json: Dict[str, Any], operation: str
    ) -> Dict[str, Any]:
        return await self.request("POST", url, json=json, operation=operation)

    async def patch(
        self, url: str, *, json: Dict[str, Any], operation: str
    ) -> Dict[str, Any]:
        return await self.request("PATCH", url, json=json, operation=operation)

    async def delete(
        self,
        url: str,
        *,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.request("DELETE", url, params=params, operation=operation)

    async def query(self, query: RootQuery, *, operation: str) -> Dict[str, Any]:
        """Submit a graph query to the internal query endpoint."""
        return await self.post(
            QUERY_PATH, json={"query": query.to_payload()}, operation=operation
        )

    @staticmethod
    def public_path(*segments: str) -> str:
        """Build a public REST API path, e.g. public_path("databases", "DB1")."""
        return "/".join([PUBLIC_API_PATH, *segments])
