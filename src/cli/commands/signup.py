"""
Signup commands for Newsletter Subscription Manager.
"""

import click

from src.cli_session import get_cli_session_manager
from src.newsletter_signup import get_subscribe_handler, list_providers


@click.command('subscribe')
@click.option('--user-id', type=int, required=True, help='User to sign up')
@click.option('--provider', required=True, help='Provider key (see "providers")')
def subscribe(user_id, provider):
    """
    Sign a user up to a third-party newsletter.

    Example:
        python main.py subscribe --user-id 1 --provider morning_brew
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        handler = get_subscribe_handler(provider, session)
        if handler is None:
            click.secho(f"✗ Error: Unsupported provider {provider}", fg='red')
            raise click.Abort()

        subscriptions = handler.handle_subscribe(user_id, provider)
        if not subscriptions:
            click.secho(f"✗ Signup with {provider} failed, try again later", fg='red')
            raise click.Abort()

        click.secho(f"✓ Subscribed to {len(subscriptions)} newsletter(s)", fg='green')
        for sub in subscriptions:
            click.echo(f"  {sub.id}: {sub.name}")


@click.command('providers')
def providers():
    """List supported signup providers."""
    for key in list_providers():
        click.echo(key)
