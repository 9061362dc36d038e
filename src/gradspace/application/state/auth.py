from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, TypeVar

from gradspace.application.dto.principal import Principal
from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.domain.entities.user import User
from gradspace.services import auth_service

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AuthState:
    user: User | None = None
    is_authenticated: bool = False
    is_loading: bool = False
    is_checking_auth: bool = True
    error: str | None = None
    message: str | None = None


class AuthStore(Store[AuthState]):
    """Session of the local user against the auth service."""

    def __init__(self, api: ApiClient) -> None:
        super().__init__(AuthState())
        self._api = api

    @property
    def principal(self) -> Principal | None:
        user = self.state.user
        if user is None:
            return None
        return Principal(
            user_id=user.id,
            role=user.role,
            username=user.username,
            full_name=user.full_name,
            profile_image=user.profile_image,
        )

    async def sign_up(self, username: str, email: str, password: str) -> None:
        user = await self._run(auth_service.sign_up(username, email, password, self._api), "Error signing up")
        self.patch(user=user, is_authenticated=True)

    async def verify_email(self, code: str) -> None:
        user = await self._run(auth_service.verify_email(code, self._api), "Error verifying email")
        self.patch(user=user, is_authenticated=True)

    async def login(self, email: str, password: str) -> None:
        user = await self._run(auth_service.login(email, password, self._api), "Error logging in")
        self.patch(user=user, is_authenticated=True)

    async def logout(self) -> None:
        await self._run(auth_service.logout(self._api), "Error logging out")
        self.patch(user=None, is_authenticated=False)

    async def forgot_password(self, email: str) -> None:
        message = await self._run(
            auth_service.forgot_password(email, self._api),
            "Error sending reset password email",
        )
        self.patch(message=message)

    async def reset_password(self, token: str, password: str) -> None:
        message = await self._run(
            auth_service.reset_password(token, password, self._api),
            "Error resetting password",
        )
        self.patch(message=message)

    async def check_auth(self) -> None:
        """Resolve the current session; an unauthenticated result is not an error."""
        self.patch(is_checking_auth=True, error=None)
        try:
            user = await auth_service.check_auth(self._api)
        except AppError as exc:
            logger.info("No authenticated session: %s", exc.detail)
            self.patch(user=None, is_authenticated=False, is_checking_auth=False)
            return
        self.patch(user=user, is_authenticated=True, is_checking_auth=False)

    def clear_error(self) -> None:
        self.patch(error=None)

    async def _run(self, call: Awaitable[T], default_error: str) -> T:
        self.patch(is_loading=True, error=None)
        try:
            result = await call
        except AppError as exc:
            self.patch(is_loading=False, error=exc.detail or default_error)
            raise
        self.patch(is_loading=False)
        return result
