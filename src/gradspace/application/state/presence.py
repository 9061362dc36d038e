from __future__ import annotations

from dataclasses import dataclass

from gradspace.application.state.store import Store
from gradspace.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class PresenceState:
    online_users: frozenset[UserId] = frozenset()


class PresenceStore(Store[PresenceState]):
    def __init__(self) -> None:
        super().__init__(PresenceState())

    def is_online(self, user_id: str) -> bool:
        return user_id in self.state.online_users
