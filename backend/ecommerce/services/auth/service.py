# ecommerce/services/auth/service.py
from __future__ import annotations

import logging

from ecommerce.services._shared.base import BaseService, ServiceContext
from ecommerce.services._shared.dto import AuthenticatedIdentity
from ecommerce.services.auth.dto import LoginIn, LogoutIn, RefreshIn
from ecommerce.services.identity.dto import UserAuthIn, UserPublicOut
from ecommerce.services.identity.service import IdentityService
from ecommerce.services.tokens.dto import TokenPairOut
from ecommerce.services.tokens.service import TokenService

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication use cases (login / refresh / logout / me / deactivate).

    Credentials are checked by :class:`IdentityService`; every token
    operation is delegated to :class:`TokenService`.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        identity: IdentityService | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param tokens: Token lifecycle service.
        :param identity: User directory; a default instance when omitted.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = tokens
        self.identity = identity or IdentityService(ctx=self.ctx)

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Verify credentials and issue a token pair.

        :raises InvalidCredentialsError: Unknown user or wrong password.
        :raises CredentialStoreError: The refresh token cannot be stored.
        """
        user = self.identity.authenticate(UserAuthIn(email=dto.email, password=dto.password))
        return self.tokens.issue(user.public_id, user.authorities)

    def refresh(self, dto: RefreshIn) -> str:
        """Return a new access token for a current refresh token."""
        return self.tokens.refresh(dto.refresh_token)

    def logout(self, dto: LogoutIn) -> None:
        """Drop the refresh session and blacklist the access token."""
        self.tokens.revoke(dto.access_token)

    def deactivate(self, public_id: str) -> None:
        """
        Soft-delete a user and end their refresh session.

        :raises NotFoundError: If no active user has ``public_id``.
        :raises CredentialStoreError: The refresh session cannot be dropped.
        """
        self.identity.deactivate(public_id)
        self.tokens.end_session(public_id)

    def me(self, identity: AuthenticatedIdentity) -> UserPublicOut:
        """Profile of the authenticated caller."""
        return self.identity.get_by_public_id(identity.subject)
