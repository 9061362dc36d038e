from __future__ import annotations

from gradspace.domain.entities.user import Recipient, User
from gradspace.domain.value_objects.ids import UserId
from gradspace.infrastructure.http.schemas.user import RecipientSchema, UserSchema


def recipient_to_entity(schema: RecipientSchema) -> Recipient:
    return Recipient(
        recipient_id=UserId(schema.recipient_id),
        full_name=schema.recipient_full_name,
        profile_img=schema.recipient_profile_img,
    )


def user_to_entity(schema: UserSchema) -> User:
    return User(
        id=UserId(schema.id),
        username=schema.username,
        email=schema.email,
        full_name=schema.full_name,
        role=schema.role,
        department=schema.department,
        batch=schema.batch,
        is_verified=schema.is_verified,
        is_onboard=schema.is_onboard,
        registration_status=schema.registration_status,
        profile_image=schema.profile_image or "",
    )
