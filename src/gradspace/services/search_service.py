from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from gradspace.application.ports.api import ApiClient
from gradspace.domain.entities.user import Recipient
from gradspace.infrastructure.http.mappers.user import recipient_to_entity
from gradspace.infrastructure.http.schemas.user import RecipientSearchResponse


@dataclass(frozen=True, slots=True)
class RecipientPage:
    results: list[Recipient]
    has_more: bool


async def search_recipients(query: str, page: int, api: ApiClient) -> RecipientPage:
    """Search people to message; an empty query lists suggestions instead."""
    if query:
        path = f"/messages/search/{quote(query, safe='')}"
    else:
        path = "/messages/suggested/users"
    body = await api.get(path, params={"page": page})
    response = RecipientSearchResponse.model_validate(body)
    has_more = response.meta.has_more if response.meta else False
    return RecipientPage(
        results=[recipient_to_entity(r) for r in response.results],
        has_more=has_more,
    )
