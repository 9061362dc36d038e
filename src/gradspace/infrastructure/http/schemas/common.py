from __future__ import annotations

from pydantic import BaseModel


class PageMeta(BaseModel):
    """Pagination block of list endpoints that report page counts."""

    current_page: int = 1
    per_page: int = 10
    total_pages: int = 0
    total_items: int = 0

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages


class Pagination(BaseModel):
    """Pagination block of list endpoints that report a total only."""

    page: int = 1
    limit: int = 10
    total: int = 0


class ActionResponse(BaseModel):
    success: bool = True
    message: str = ""
