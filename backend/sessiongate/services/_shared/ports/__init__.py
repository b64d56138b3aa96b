"""
sessiongate.services._shared.ports
==================================

Hexagonal interfaces the session layer depends on.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec` plus the claims and tagged result types it
    exchanges with the service layer.

- :mod:`session_store`:
    Defines :class:`~.SessionStore` and :class:`~.SessionView`, the durable
    record of login sessions.

- :mod:`user_directory`:
    Defines :class:`~.UserDirectory` and :class:`~.UserRecord` for
    identifier lookups during login.

Concrete adapters (SQL, Redis, PyJWT) live under ``sessiongate.infra``.
"""

from __future__ import annotations

from .session_store import InMemorySessionStore, SessionStore, SessionView
from .token_codec import (
    HMAC_ALGORITHMS,
    KeyLoader,
    SigningFault,
    SignResult,
    TokenClaims,
    TokenCodec,
    TokenSettings,
    TokenState,
    TokenType,
    VerifyResult,
)
from .user_directory import InMemoryUserDirectory, UserDirectory, UserRecord

__all__ = [
    "HMAC_ALGORITHMS",
    "KeyLoader",
    "SigningFault",
    "SignResult",
    "TokenClaims",
    "TokenCodec",
    "TokenSettings",
    "TokenState",
    "TokenType",
    "VerifyResult",
    "SessionStore",
    "SessionView",
    "InMemorySessionStore",
    "UserDirectory",
    "UserRecord",
    "InMemoryUserDirectory",
]
