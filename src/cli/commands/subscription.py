"""
Subscription commands for Newsletter Subscription Manager.

Handles listing and recording subscriptions.
"""

import click

from src.cli_session import get_cli_session_manager
from src.database import SubscriptionStore, SaveSubscriptionInput, PersistenceError


@click.command('list-subscriptions')
@click.option('--user-id', type=int, required=True, help='User to list subscriptions for')
@click.option('--status', 'status_filter', type=click.Choice(['all', 'active', 'unsubscribed']),
              default='all', help='Filter subscriptions by status')
def list_subscriptions(user_id, status_filter):
    """
    List subscriptions for a user.

    Example:
        python main.py list-subscriptions --user-id 1
        python main.py list-subscriptions --user-id 1 --status unsubscribed
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        status = None if status_filter == 'all' else status_filter.upper()
        subscriptions = SubscriptionStore(session).list_for_user(user_id, status=status)

        if not subscriptions:
            click.echo(f"\nNo subscriptions found ({status_filter})")
            return

        click.echo(f"\nSubscriptions for user {user_id} ({status_filter}): {len(subscriptions)}")
        click.echo("=" * 80)

        for sub in subscriptions:
            marker = "" if sub.is_active() else f" [{sub.status}]"
            click.echo(f"\n  ID: {sub.id}{marker}")
            click.echo(f"  Name: {sub.name}")
            click.echo(f"  Type: {sub.type}")
            if sub.newsletter_email:
                click.echo(f"  Delivered to: {sub.newsletter_email.address}")
            if sub.unsubscribe_mail_to:
                click.echo(f"  Unsubscribe email: {sub.unsubscribe_mail_to}")
            if sub.unsubscribe_http_url:
                click.echo(f"  Unsubscribe URL: {sub.unsubscribe_http_url}")

        click.echo("\n" + "=" * 80)


@click.command('save-subscription')
@click.option('--user-id', type=int, required=True, help='Subscribing user')
@click.option('--name', required=True, help='Newsletter name')
@click.option('--newsletter-email-id', type=int, required=True, help='Receiving address id')
@click.option('--mail-to', help='Unsubscribe mailto target (address[?subject=...])')
@click.option('--http-url', help='Unsubscribe URL')
@click.option('--icon', help='Icon URL')
def save_subscription(user_id, name, newsletter_email_id, mail_to, http_url, icon):
    """
    Record a newsletter subscription, refreshing it if it already exists.

    Example:
        python main.py save-subscription --user-id 1 --name "Weekly" --newsletter-email-id 1 \\
            --mail-to "leave@weekly.example.com?subject=Bye"
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        try:
            subscription_id = SubscriptionStore(session).save_subscription(SaveSubscriptionInput(
                user_id=user_id,
                name=name,
                newsletter_email_id=newsletter_email_id,
                unsubscribe_mail_to=mail_to,
                unsubscribe_http_url=http_url,
                icon=icon
            ))
        except PersistenceError as e:
            click.secho(f"✗ Error saving subscription: {e}", fg='red')
            raise click.Abort()

        click.secho(f"✓ Subscription saved (ID: {subscription_id})", fg='green')
