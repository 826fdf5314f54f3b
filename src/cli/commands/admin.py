"""
Admin commands for Newsletter Subscription Manager.

Handles database initialization, users and their receiving addresses.
"""

import click
from sqlalchemy.exc import IntegrityError

from src.cli_session import get_cli_session_manager
from src.database import init_database, create_newsletter_email, PersistenceError
from src.database.models import NewsletterEmail, User


@click.command('init')
def init():
    """
    Initialize the database.

    Example:
        python main.py init
    """
    try:
        db_url = init_database()
        click.secho("✓ Database initialized successfully", fg='green')
        click.echo(f"Database location: {db_url}")
    except Exception as e:
        click.secho(f"✗ Error initializing database: {e}", fg='red')
        raise click.Abort()


@click.group()
def user():
    """User management commands."""
    pass


@user.command('add')
@click.argument('email')
@click.option('--name', help='Display name')
def add_user(email, name):
    """
    Add a user.

    Example:
        python main.py user add reader@example.com --name Reader
    """
    if '@' not in email:
        click.secho("✗ Error: Invalid email address format", fg='red')
        raise click.Abort()

    session_manager = get_cli_session_manager()
    try:
        with session_manager.get_session() as session:
            new_user = User(email=email, name=name)
            session.add(new_user)
            session.commit()

            click.secho("✓ User added successfully", fg='green')
            click.echo(f"  ID: {new_user.id}")
            click.echo(f"  Email: {email}")

    except IntegrityError:
        click.secho(f"✗ Error: User {email} already exists", fg='red')
        raise click.Abort()


@user.command('list')
def list_users():
    """
    List all users.

    Example:
        python main.py user list
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        users = session.query(User).order_by(User.id).all()

        if not users:
            click.echo("No users configured.")
            return

        for u in users:
            click.echo(f"  {u.id}: {u.email}" + (f" ({u.name})" if u.name else ""))


@click.group('newsletter-email')
def newsletter_email():
    """Receiving address commands."""
    pass


@newsletter_email.command('add')
@click.option('--user-id', type=int, required=True, help='Owner of the new address')
def add_newsletter_email(user_id):
    """
    Provision a new receiving address for a user.

    Example:
        python main.py newsletter-email add --user-id 1
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        try:
            created = create_newsletter_email(session, user_id)
        except PersistenceError as e:
            click.secho(f"✗ Error: {e}", fg='red')
            raise click.Abort()

        click.secho(f"✓ Newsletter email created: {created.address}", fg='green')
        click.echo(f"  ID: {created.id}")


@newsletter_email.command('list')
@click.option('--user-id', type=int, required=True, help='Owner of the addresses')
def list_newsletter_emails(user_id):
    """
    List a user's receiving addresses.

    Example:
        python main.py newsletter-email list --user-id 1
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        addresses = session.query(NewsletterEmail).filter_by(
            user_id=user_id
        ).order_by(NewsletterEmail.id).all()

        if not addresses:
            click.echo(f"No newsletter emails for user {user_id}")
            return

        for address in addresses:
            click.echo(f"  {address.id}: {address.address} ({len(address.subscriptions)} subscriptions)")
