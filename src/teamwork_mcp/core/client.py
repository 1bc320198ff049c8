import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Generator, Optional

import httpx

from .context import current_bearer_token, current_request_id


class TeamworkClientError(Exception):
    """Base error for client failures."""


class TeamworkHTTPError(TeamworkClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text


class TeamworkParseError(TeamworkClientError):
    pass


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_on_429: bool = False


class ContextBearerAuth(httpx.Auth):
    """
    Bearer auth resolved per request.
    The token stored in the request context (HTTP transport) wins over the
    static token configured at startup (stdio transport).
    """

    def __init__(self, default_token: Optional[str] = None):
        self.default_token = default_token or None

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        token = current_bearer_token() or self.default_token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


class TeamworkClient:
    """
    Shared HTTP client for the Teamwork.com Projects and Desk JSON APIs.
    - Handles auth, base URL, timeouts, retries
    - Returns raw dict payloads
    - No business logic; tools own domain decisions
    """

    def __init__(
        self,
        *,
        base_url: str,
        bearer_token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        user_agent: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        if not base_url:
            raise ValueError("base_url must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("teamwork_mcp.client")

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if user_agent:
            headers["User-Agent"] = user_agent

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            auth=ContextBearerAuth(bearer_token),
            headers=headers,
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "TeamworkClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Core request method.
        - Retries on transient failures (network/timeouts + 502/503/504; optionally 429)
        - Raises TeamworkHTTPError on non-2xx HTTP responses
        - Raises TeamworkClientError on network/timeout errors after retries
        - Raises TeamworkParseError if response isn't a JSON object
        - Returns parsed JSON dict on success ({} for empty bodies)
        """
        method = method.upper()
        start = time.perf_counter()
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempt = 0

        while True:
            try:
                resp = await self.http.request(method, url, params=params, json=json)
                duration_ms = int((time.perf_counter() - start) * 1000)

                # structured-ish log without secrets
                self.log.debug(
                    "tw.request",
                    extra={
                        "request_id": current_request_id(),
                        "tool": tool,
                        "method": method,
                        "path": resp.request.url.path,
                        "status": resp.status_code,
                        "duration_ms": duration_ms,
                        "attempt": attempt,
                    },
                )

                if resp.status_code in self.retry.retry_statuses or (
                    self.retry.retry_on_429 and resp.status_code == 429
                ):
                    if attempt < self.retry.max_retries:
                        await asyncio.sleep(
                            self.retry.backoff_base_seconds * (2**attempt)
                        )
                        attempt += 1
                        continue

                if resp.status_code < 200 or resp.status_code >= 300:
                    raise self._to_http_error(resp, method=method)

                return self._safe_json(resp)

            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                if attempt < self.retry.max_retries:
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise TeamworkClientError(
                    f"Network/timeout error calling {method} {url}: {exc}"
                ) from exc

            except httpx.HTTPError as exc:
                raise TeamworkClientError(
                    f"HTTPX error calling {method} {url}: {exc}"
                ) from exc

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # 204 No Content and friends
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise TeamworkParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise TeamworkParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    @staticmethod
    def _error_message(payload: Dict[str, Any]) -> Optional[str]:
        # v3 endpoints: {"errors": [{"title": ..., "detail": ...}]}
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict):
                return first.get("detail") or first.get("title")
            return str(first)
        # legacy endpoints: {"MESSAGE": ..., "STATUS": "Error"}
        return payload.get("MESSAGE") or payload.get("message") or payload.get("error")

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> TeamworkHTTPError:
        url = str(resp.request.url)
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
        except ValueError:
            response_text = (resp.text or "")[:500]
        else:
            if isinstance(parsed, dict):
                response_json = parsed
                message = self._error_message(parsed) or message

        return TeamworkHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request("GET", url, params=params, tool=tool)

    async def post(
        self, url: str, *, json: Dict[str, Any], tool: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.request("POST", url, json=json, tool=tool)

    async def put(
        self, url: str, *, json: Dict[str, Any], tool: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.request("PUT", url, json=json, tool=tool)

    async def patch(
        self, url: str, *, json: Dict[str, Any], tool: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.request("PATCH", url, json=json, tool=tool)

    async def delete(self, url: str, *, tool: Optional[str] = None) -> Dict[str, Any]:
        return await self.request("DELETE", url, tool=tool)

    async def upload(
        self,
        url: str,
        content: bytes,
        *,
        content_type: str,
        tool: Optional[str] = None,
    ) -> None:
        """
        PUT raw bytes to a pre-signed storage URL returned by the API.
        The URL carries its own credentials, so the bearer token is not sent
        and the request is not retried.
        """
        start = time.perf_counter()
        try:
            resp = await self.http.put(
                url,
                content=content,
                headers={"Content-Type": content_type},
                auth=None,
            )
        except httpx.HTTPError as exc:
            raise TeamworkClientError(f"HTTPX error uploading file: {exc}") from exc

        self.log.debug(
            "tw.upload",
            extra={
                "request_id": current_request_id(),
                "tool": tool,
                "method": "PUT",
                "path": resp.request.url.path,
                "status": resp.status_code,
                "duration_ms": int((time.perf_counter() - start) * 1000),
                "bytes": len(content),
            },
        )
        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method="PUT")
