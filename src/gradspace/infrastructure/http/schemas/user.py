from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gradspace.domain.value_objects.enums import RegistrationStatus, UserRole
from gradspace.infrastructure.http.schemas.common import PageMeta


class RecipientSchema(BaseModel):
    recipient_id: str = Field(alias="recipientId")
    recipient_full_name: str = Field(default="", alias="recipientFullName")
    recipient_profile_img: str = Field(default="", alias="recipientProfileImg")

    model_config = ConfigDict(populate_by_name=True)


class RecipientSearchResponse(BaseModel):
    # The search endpoint spells it "recipents"; suggestions use "users".
    recipents: list[RecipientSchema] | None = None
    users: list[RecipientSchema] | None = None
    meta: PageMeta | None = None

    @property
    def results(self) -> list[RecipientSchema]:
        return self.recipents or self.users or []


class UserSchema(BaseModel):
    id: str
    username: str = ""
    email: str = ""
    full_name: str = ""
    role: UserRole = UserRole.STUDENT
    department: str = ""
    batch: str = ""
    is_verified: bool = False
    is_onboard: bool = False
    registration_status: RegistrationStatus = RegistrationStatus.NOT_REGISTERED
    profile_image: str | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class AuthResponse(BaseModel):
    user: UserSchema | None = None
    message: str | None = None
