"""Flask CLI commands for account administration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from ecommerce.models.user import UserRole
from ecommerce.services import IdentityService, UserSignUpIn
from ecommerce.services._shared.errors import ConflictError

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Collection of account administration commands."""


@users_cli.command("create-admin")
@click.option("--email", required=True, help="Login email of the administrator.")
@click.option("--name", required=True, help="Display name.")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Initial password (prompted when omitted).",
)
@with_appcontext
def create_admin(email: str, name: str, password: str) -> None:
    """Create a user with the ``ADMIN`` role."""
    try:
        user = IdentityService().sign_up(
            UserSignUpIn(email=email, password=password, name=name), role=UserRole.ADMIN
        )
    except ConflictError as exc:
        raise click.ClickException(f"An active account already uses {email!r}.") from exc
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    LOGGER.info("Created administrator %s", user.public_id)
    click.echo(f"Created admin {user.email} ({user.public_id})")
