from __future__ import annotations

from dataclasses import dataclass

from gradspace.domain.value_objects.enums import RegistrationStatus, UserRole
from gradspace.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class Recipient:
    """Another user as seen from the chat: search results and conversation peers."""

    recipient_id: UserId
    full_name: str
    profile_img: str


@dataclass(frozen=True, slots=True)
class User:
    id: UserId
    username: str
    email: str
    full_name: str
    role: UserRole
    department: str = ""
    batch: str = ""
    is_verified: bool = False
    is_onboard: bool = False
    registration_status: RegistrationStatus = RegistrationStatus.NOT_REGISTERED
    profile_image: str = ""
