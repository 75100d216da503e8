from .dto import UserAuthIn, UserAuthOut, UserPublicOut, UserSignUpIn
from .service import IdentityService

__all__ = ["IdentityService", "UserAuthIn", "UserAuthOut", "UserPublicOut", "UserSignUpIn"]
