from sessiongate.services.users.dto import UserPublicOut, UserRegistrationIn
from sessiongate.services.users.service import UserService

__all__ = ["UserPublicOut", "UserRegistrationIn", "UserService"]
