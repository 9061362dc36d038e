from __future__ import annotations

from dataclasses import dataclass

from gradspace.domain.value_objects.enums import UserRole
from gradspace.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class Principal:
    """The local user the client acts for."""

    user_id: UserId
    role: UserRole = UserRole.STUDENT
    username: str = ""
    full_name: str = ""
    profile_image: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
