from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from gradspace.infrastructure.db.models.preference import PreferenceModel


class PreferenceRepo:
    """Implements PreferenceReader and PreferenceWriter."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> str | None:
        stmt = select(PreferenceModel.value).where(PreferenceModel.key == key)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        stmt = (
            sqlite_insert(PreferenceModel)
            .values(key=key, value=value)
            .on_conflict_do_update(
                index_elements=[PreferenceModel.key],
                set_={"value": value, "updated_at": func.now()},
            )
        )
        await self._session.execute(stmt)
        await self._session.commit()
