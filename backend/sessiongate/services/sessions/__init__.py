from sessiongate.services.sessions.dto import LoginIn, LoginResult, LoginStatus, TokenPairOut
from sessiongate.services.sessions.service import SessionService, build_claims

__all__ = [
    "LoginIn",
    "LoginResult",
    "LoginStatus",
    "SessionService",
    "TokenPairOut",
    "build_claims",
]
