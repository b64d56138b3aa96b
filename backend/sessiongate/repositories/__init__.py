from sessiongate.repositories.session import SessionRepository
from sessiongate.repositories.user import UserRepository

__all__ = [
    "SessionRepository",
    "UserRepository",
]
