from __future__ import annotations

from gradspace.application.exceptions import UnauthorizedError
from gradspace.application.ports.api import ApiClient
from gradspace.domain.entities.user import User
from gradspace.infrastructure.http.mappers.user import user_to_entity
from gradspace.infrastructure.http.schemas.user import AuthResponse


def _user_from(body: object) -> User:
    response = AuthResponse.model_validate(body)
    if response.user is None:
        raise UnauthorizedError("Response carries no user")
    return user_to_entity(response.user)


def _message_from(body: object) -> str:
    return AuthResponse.model_validate(body).message or ""


async def sign_up(username: str, email: str, password: str, api: ApiClient) -> User:
    body = await api.post(
        "/signup",
        json={"username": username, "email": email, "password": password},
    )
    return _user_from(body)


async def verify_email(code: str, api: ApiClient) -> User:
    return _user_from(await api.post("/verify-email", json={"code": code}))


async def check_auth(api: ApiClient) -> User:
    return _user_from(await api.get("/check-auth"))


async def login(email: str, password: str, api: ApiClient) -> User:
    return _user_from(await api.post("/login", json={"email": email, "password": password}))


async def logout(api: ApiClient) -> None:
    await api.post("/logout")


async def forgot_password(email: str, api: ApiClient) -> str:
    return _message_from(await api.post("/forgot-password", json={"email": email}))


async def reset_password(token: str, password: str, api: ApiClient) -> str:
    return _message_from(await api.post(f"/reset-password/{token}", json={"password": password}))
