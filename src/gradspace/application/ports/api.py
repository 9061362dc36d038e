from __future__ import annotations

from typing import Any, Protocol


class ApiClient(Protocol):
    """Authenticated JSON access to the GradSpace REST API.

    Paths are relative to the configured base URL. Every method returns the
    decoded JSON body (``{}`` for an empty body) or raises an ``AppError``.
    """

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any: ...

    async def post(self, path: str, *, json: Any = None) -> Any: ...

    async def put(self, path: str, *, json: Any = None) -> Any: ...

    async def patch(self, path: str, *, json: Any = None) -> Any: ...

    async def delete(self, path: str) -> Any: ...
