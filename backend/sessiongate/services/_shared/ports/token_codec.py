from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Protocol

#: Returns the current signing secret, or ``None`` when it is not configured.
KeyLoader = Callable[[], str | None]

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class TokenType(str, Enum):
    """Kind of token; only refresh tokens may be exchanged for access tokens."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenState(Enum):
    """Outcome of verifying a token."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"
    CONFIG_FAULT = "config_fault"


class SigningFault(Enum):
    """Reason a token could not be issued. Always a server-side fault."""

    MISSING_KEY = "missing_key"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    SIGNER_ERROR = "signer_error"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Closed claims payload embedded in every token.

    :ivar user_id: Owning user id (``sub``).
    :ivar session_id: Session the token was derived from (``sid``).
    :ivar token_type: Access or refresh (``typ``).
    :ivar role: Authorization role snapshot.
    :ivar email: Public profile snapshot.
    :ivar phone_number: Public profile snapshot.
    :ivar first_name: Public profile snapshot.
    :ivar last_name: Public profile snapshot.
    """

    user_id: int
    session_id: int
    token_type: TokenType
    role: str
    email: str | None = None
    phone_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to JWT claim names."""
        payload: dict[str, Any] = {
            "sub": str(self.user_id),
            "sid": self.session_id,
            "typ": self.token_type.value,
            "role": self.role,
            "email": self.email,
            "phone": self.phone_number,
            "given_name": self.first_name,
            "family_name": self.last_name,
        }
        return {k: v for k, v in payload.items() if v is not None}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TokenClaims | None:
        """
        Rebuild claims from a decoded payload.

        :returns: ``None`` when a required claim is missing or malformed.
        """
        try:
            user_id = _as_int(payload["sub"])
            session_id = _as_int(payload["sid"])
            token_type = TokenType(payload["typ"])
            role = payload["role"]
        except (KeyError, TypeError, ValueError):
            return None
        if user_id is None or session_id is None or not isinstance(role, str):
            return None
        return cls(
            user_id=user_id,
            session_id=session_id,
            token_type=token_type,
            role=role,
            email=payload.get("email"),
            phone_number=payload.get("phone"),
            first_name=payload.get("given_name"),
            last_name=payload.get("family_name"),
        )


def _as_int(value: Any) -> int | None:
    # bool is an int subclass; a boolean id is never legitimate
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


@dataclass(frozen=True, slots=True)
class SignResult:
    """Either a compact token or the fault that prevented issuing one."""

    token: str | None = None
    fault: SigningFault | None = None

    @property
    def ok(self) -> bool:
        return self.token is not None


@dataclass(frozen=True, slots=True)
class VerifyResult:
    """
    Three-way verification outcome plus the configuration fault.

    ``claims`` is populated for ``VALID`` and ``EXPIRED`` only.
    """

    state: TokenState
    claims: TokenClaims | None = None

    @property
    def is_valid(self) -> bool:
        return self.state is TokenState.VALID

    @property
    def is_expired(self) -> bool:
        return self.state is TokenState.EXPIRED

    @property
    def is_config_fault(self) -> bool:
        return self.state is TokenState.CONFIG_FAULT


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Explicit token configuration handed to a codec.

    :ivar key_loader: Called on every sign/verify; never cached.
    :ivar algorithm: Default signing algorithm.
    :ivar access_ttl: Access token lifetime.
    :ivar refresh_ttl: Refresh token lifetime.
    :ivar leeway: Clock-skew tolerance applied to ``exp``.
    """

    key_loader: KeyLoader
    algorithm: str = "HS256"
    access_ttl: timedelta = field(default_factory=lambda: timedelta(hours=1))
    refresh_ttl: timedelta = field(default_factory=lambda: timedelta(days=7))
    leeway: timedelta = field(default_factory=timedelta)

    @classmethod
    def static(cls, secret: str | None, **kwargs: Any) -> TokenSettings:
        """Build settings around a fixed secret (tests, scripts)."""
        return cls(key_loader=lambda: secret, **kwargs)


class TokenCodec(Protocol):
    """Port for signing and verifying compact, tamper-evident tokens."""

    settings: TokenSettings

    def sign(
        self,
        claims: TokenClaims,
        ttl: timedelta,
        algorithm: str | None = None,
    ) -> SignResult: ...

    def verify(self, token: str) -> VerifyResult: ...
