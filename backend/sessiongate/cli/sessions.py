"""Flask CLI commands for inspecting and revoking login sessions."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from sessiongate.core.sessions import get_session_service


@click.group("sessions")
def sessions_cli() -> None:
    """Inspect and revoke login sessions."""


@sessions_cli.command("list")
@click.argument("user_id", type=int)
@click.option("--valid-only", is_flag=True, help="Hide invalidated sessions.")
@with_appcontext
def list_command(user_id: int, valid_only: bool) -> None:
    """List the sessions of USER_ID."""
    views = get_session_service().list_sessions(user_id)
    if valid_only:
        views = [v for v in views if v.is_valid]
    if not views:
        click.echo("(no sessions)")
        return
    for v in views:
        state = "valid" if v.is_valid else "invalid"
        click.echo(f"{v.id:>6}  {state:<7}  {v.created_at:%Y-%m-%d %H:%M:%S}  {v.user_client or '-'}")


@sessions_cli.command("revoke")
@click.argument("session_id", type=int)
@with_appcontext
def revoke_command(session_id: int) -> None:
    """Invalidate SESSION_ID; its refresh token stops working immediately."""
    if not get_session_service().logout(session_id):
        raise click.ClickException(f"Session {session_id} not found")
    click.echo(f"Session {session_id} revoked")
