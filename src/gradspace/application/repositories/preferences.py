from __future__ import annotations

from typing import Protocol


class PreferenceReader(Protocol):
    async def get(self, key: str) -> str | None: ...


class PreferenceWriter(Protocol):
    async def set(self, key: str, value: str) -> None: ...
