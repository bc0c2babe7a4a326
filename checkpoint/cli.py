"""Credential helpers: `flask security hash-password` and `flask security session-secret`."""

import secrets
import click
from flask.cli import AppGroup

from checkpoint.utils.security import hash_password

security_cli = AppGroup('security', help='Generate credentials for the .env file.')


@security_cli.command('hash-password')
@click.password_option('--password', prompt='Password to hash')
def hash_password_command(password):
    """Print a bcrypt hash for ADMIN_PASSWORD_HASH or REPORTS_PASSWORD_HASH."""
    if not password:
        raise click.BadParameter('Password cannot be empty', param_hint='password')

    hashed = hash_password(password)
    click.echo('Add this to your .env file:')
    click.echo(f'ADMIN_PASSWORD_HASH={hashed}')
    click.echo('Or for reports:')
    click.echo(f'REPORTS_PASSWORD_HASH={hashed}')


@security_cli.command('session-secret')
def session_secret_command():
    """Print a random SECRET_KEY."""
    click.echo('Add this to your .env file:')
    click.echo(f'SECRET_KEY={secrets.token_hex(32)}')
