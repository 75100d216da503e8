from .dto import LoginIn, LogoutIn, RefreshIn
from .service import AuthService

__all__ = ["AuthService", "LoginIn", "LogoutIn", "RefreshIn"]
