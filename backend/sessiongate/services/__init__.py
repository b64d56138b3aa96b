"""Service layer public API.

Re-exports
----------
- :class:`CredentialHasher` (from ``sessiongate.services.credentials``)
- :class:`SessionService` and its DTOs (from ``sessiongate.services.sessions``)
- :class:`UserService` and its DTOs (from ``sessiongate.services.users``)
"""

from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.sessions import (
    LoginIn,
    LoginResult,
    LoginStatus,
    SessionService,
    TokenPairOut,
)
from sessiongate.services.users import UserPublicOut, UserRegistrationIn, UserService

__all__ = [
    "CredentialHasher",
    "LoginIn",
    "LoginResult",
    "LoginStatus",
    "SessionService",
    "TokenPairOut",
    "UserPublicOut",
    "UserRegistrationIn",
    "UserService",
]
