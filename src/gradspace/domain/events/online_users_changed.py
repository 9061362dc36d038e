from __future__ import annotations

from dataclasses import dataclass

from gradspace.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class OnlineUsersChanged:
    user_ids: frozenset[UserId]
