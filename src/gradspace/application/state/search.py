from __future__ import annotations

import logging
from dataclasses import dataclass

from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.domain.entities.user import Recipient
from gradspace.services import search_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UserSearchState:
    query: str = ""
    results: tuple[Recipient, ...] = ()
    page: int = 1
    has_more: bool = True
    is_loading: bool = False
    error: str | None = None


class UserSearchStore(Store[UserSearchState]):
    """Paged people picker used to start a new chat."""

    def __init__(self) -> None:
        super().__init__(UserSearchState())

    async def fetch(
        self,
        api: ApiClient,
        query: str,
        *,
        reset: bool = False,
        page: int | None = None,
    ) -> None:
        """Load one page. ``page`` is committed to state only once it arrives."""
        if reset:
            page = 1
        elif page is None:
            page = self.state.page
        self.patch(is_loading=True, error=None, query=query)
        try:
            result = await search_service.search_recipients(query, page, api)
        except AppError as exc:
            logger.warning("User search failed: %s", exc.detail)
            self.patch(is_loading=False, error="Failed to fetch users")
            return

        if reset:
            results = tuple(result.results)
        else:
            results = (*self.state.results, *result.results)
        self.patch(results=results, page=page, has_more=result.has_more, is_loading=False)

    async def load_more(self, api: ApiClient) -> None:
        if self.state.is_loading or not self.state.has_more:
            return
        await self.fetch(api, self.state.query, page=self.state.page + 1)

    def find(self, recipient_id: str) -> Recipient | None:
        for recipient in self.state.results:
            if recipient.recipient_id == recipient_id:
                return recipient
        return None

    def clear(self) -> None:
        self.set(UserSearchState())
