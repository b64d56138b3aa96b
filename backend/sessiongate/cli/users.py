"""Flask CLI commands for bootstrapping accounts."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from sessiongate.models.user import Role
from sessiongate.services._shared.errors import ConflictError
from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.users import UserRegistrationIn, UserService


@click.group("users")
def users_cli() -> None:
    """Manage user accounts."""


@users_cli.command("create")
@click.option("--email", required=True)
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--phone-number", default=None)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.USER.value,
    show_default=True,
)
@click.password_option()
@with_appcontext
def create_command(
    email: str,
    first_name: str,
    last_name: str,
    phone_number: str | None,
    role: str,
    password: str,
) -> None:
    """Create a user with a hashed password."""
    service = UserService(hasher=CredentialHasher(current_app.config["PASSWORD_HASH_METHOD"]))
    try:
        user = service.register(
            UserRegistrationIn(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                phone_number=phone_number,
                role=role,
            )
        )
    except ConflictError as exc:
        raise click.ClickException(str(exc)) from exc
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(f"Created user {user.id} <{user.email}> role={user.role}")
