from .dto import AuthTokenConfig, TokenPairOut
from .service import TokenService

__all__ = ["AuthTokenConfig", "TokenPairOut", "TokenService"]
