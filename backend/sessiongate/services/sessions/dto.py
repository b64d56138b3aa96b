# sessiongate/services/sessions/dto.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    Exactly one identifier is used: ``email`` when present, otherwise
    ``phone_number``.

    :param secret: Raw password (to be verified, never stored).
    :type secret: str
    :param email: Login email.
    :type email: str | None
    :param phone_number: Login phone number.
    :type phone_number: str | None
    :param user_client: Client label recorded on the session (user agent).
    :type user_client: str | None
    """

    secret: str
    email: str | None = None
    phone_number: str | None = None
    user_client: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


class LoginStatus(Enum):
    """Outcome of a login attempt."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    SERVER_FAULT = "server_fault"


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param session_id: Session both tokens are bound to.
    :type session_id: int
    """

    access_token: str
    refresh_token: str
    session_id: int


@dataclass(frozen=True, slots=True)
class LoginResult:
    """Tagged login outcome; ``tokens`` is set only on success."""

    status: LoginStatus
    tokens: TokenPairOut | None = None

    @property
    def ok(self) -> bool:
        return self.status is LoginStatus.SUCCESS
