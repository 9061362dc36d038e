from __future__ import annotations

import jwt

from gradspace.application.dto.principal import Principal
from gradspace.application.exceptions import UnauthorizedError
from gradspace.domain.value_objects.enums import UserRole
from gradspace.domain.value_objects.ids import UserId


class TokenDecoder:
    """Read the local user's identity out of an access token.

    The backend is the one that enforces the token; the client only needs
    its claims. The signature is checked when a shared secret is known.
    """

    def __init__(self, secret: str = "", algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def decode(self, token: str) -> Principal:
        try:
            if self._secret:
                payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
            else:
                payload = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as exc:
            raise UnauthorizedError(f"Invalid access token: {exc}") from exc

        subject = payload.get("id", payload.get("sub"))
        if subject is None:
            raise UnauthorizedError("Access token has no subject")

        role_raw = payload.get("role", UserRole.STUDENT)
        role = UserRole(role_raw) if role_raw in UserRole.__members__.values() else UserRole.STUDENT
        return Principal(
            user_id=UserId(str(subject)),
            role=role,
            username=payload.get("username", ""),
            full_name=payload.get("full_name", ""),
            profile_image=payload.get("profile_image", ""),
        )
