"""
Management Commands

``flask create-admin``, ``flask cleanup-sessions`` and ``flask seed``.
"""

import click
from werkzeug.security import generate_password_hash

from clinic_site.extensions import db
from clinic_site.models import AdminUser
from clinic_site.services.sessions import get_session_store


def register_commands(app):

    @app.cli.command('create-admin')
    @click.option('--username', prompt=True, help='Admin username')
    @click.password_option(help='Admin password')
    def create_admin(username, password):
        """Create an admin account for the dashboard."""
        username = username.strip()
        if not username or not password:
            raise click.UsageError('Username and password are required')
        if AdminUser.query.filter_by(username=username).first():
            raise click.ClickException(f"Admin user '{username}' already exists")

        db.session.add(AdminUser(username=username, password_hash=generate_password_hash(password)))
        db.session.commit()
        click.secho(f"Admin user '{username}' created.", fg='green')

    @app.cli.command('cleanup-sessions')
    def cleanup_sessions():
        """Delete expired admin sessions now."""
        removed = get_session_store().cleanup_expired_sessions()
        click.echo(f'Removed {removed} expired session(s).')

    @app.cli.command('seed')
    def seed():
        """Insert default profile, contact details and demo content."""
        from clinic_site.seed import seed_content
        created = seed_content()
        if created:
            click.secho('Seeded: ' + ', '.join(created), fg='green')
        else:
            click.echo('Nothing to seed, content already present.')
