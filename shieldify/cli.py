"""
Flask CLI commands for managing roles

Run: flask --app run promote-admin someone@example.com
"""
import click

from shieldify import db
from shieldify.constants import ROLE_ADMIN, ROLE_CUSTOMER
from shieldify.errors import ShieldifyError
from shieldify.services.identity_service import set_role


def _change_role(email, role):
    try:
        profile = set_role(db.session, email, role)
    except ShieldifyError as e:
        raise click.ClickException(e.message)
    click.echo(f'{profile.email} is now {profile.role}')


def register_commands(app):
    @app.cli.command('promote-admin')
    @click.argument('email')
    def promote_admin(email):
        """Give an existing account the admin role."""
        _change_role(email, ROLE_ADMIN)

    @app.cli.command('demote-admin')
    @click.argument('email')
    def demote_admin(email):
        """Return an account to the customer role."""
        _change_role(email, ROLE_CUSTOMER)
