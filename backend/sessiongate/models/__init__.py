from sessiongate.models.session import Session
from sessiongate.models.user import Role, User

__all__ = [
    "Role",
    "Session",
    "User",
]
