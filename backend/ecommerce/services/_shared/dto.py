# comments in English; reST docstrings strict
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthenticatedIdentity:
    """
    Caller established from a verified access token.

    :param subject: Token subject (the user's public id).
    :type subject: str
    :param authorities: Granted authorities such as ``ROLE_USER``.
    :type authorities: frozenset[str]
    """

    subject: str
    authorities: frozenset[str]

    def has_role(self, role: str) -> bool:
        """
        Check for a role, accepting ``"ADMIN"`` as well as ``"ROLE_ADMIN"``.

        :param role: Role name with or without the ``ROLE_`` prefix.
        :type role: str
        :rtype: bool
        """
        wanted = role if role.startswith("ROLE_") else f"ROLE_{role}"
        return wanted in self.authorities
