"""REST access to the GradSpace backend over httpx."""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from gradspace.application.exceptions import (
    AppError,
    ConflictError,
    FetchError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from gradspace.infrastructure.http.correlation_id import attach_correlation_id

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[AppError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


class HttpApiClient:
    """Implements application.ports.api.ApiClient."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [attach_correlation_id]},
        )

    def set_token(self, token: str) -> None:
        if token:
            self._client.headers["Authorization"] = f"Bearer {token}"
        else:
            self._client.headers.pop("Authorization", None)

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return await self._request("POST", path, json=json)

    async def put(self, path: str, *, json: Any = None) -> Any:
        return await self._request("PUT", path, json=json)

    async def patch(self, path: str, *, json: Any = None) -> Any:
        return await self._request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, path)
            raise FetchError("Request timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise FetchError(str(exc)) from exc

        if resp.status_code >= 400:
            detail = _error_detail(resp)
            logger.warning("%s %s -> HTTP %d: %s", method, path, resp.status_code, detail)
            error_cls = _STATUS_ERRORS.get(resp.status_code)
            if error_cls is None:
                raise FetchError(detail, status_code=resp.status_code)
            raise error_cls(detail)

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            raise FetchError(
                f"Malformed response body from {path}", status_code=resp.status_code,
            ) from exc


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"HTTP {resp.status_code}"
