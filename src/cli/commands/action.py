"""
Action commands for Newsletter Subscription Manager.

Handles single and bulk unsubscribe.
"""

import click

from src.cli_session import get_cli_session_manager
from src.database import SubscriptionStore, PersistenceError
from src.orchestration import Unsubscriber


@click.command('unsubscribe')
@click.option('--id', 'subscription_id', type=int, required=True, help='Subscription ID to unsubscribe from')
def unsubscribe(subscription_id):
    """
    Unsubscribe from a subscription.

    Newsletters with an unsubscribe email address get an email sent from
    their receiving address and are removed; otherwise they are kept and
    marked unsubscribed. RSS subscriptions are removed.

    Example:
        python main.py unsubscribe --id 5
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        store = SubscriptionStore(session)
        subscription = store.get(subscription_id)
        if not subscription:
            click.secho(f"✗ Error: Subscription {subscription_id} not found", fg='red')
            raise click.Abort()

        name = subscription.name
        click.echo(f"\nUnsubscribing from {name}...")

        try:
            outcome = Unsubscriber(session, store=store).unsubscribe(subscription)
        except PersistenceError as e:
            click.secho(f"✗ Error during unsubscribe: {e}", fg='red')
            raise click.Abort()

        if outcome.deleted:
            click.secho(f"✓ Unsubscribed from {name} and removed the subscription", fg='green')
        else:
            click.secho(f"! Could not confirm unsubscribe from {name}; marked as unsubscribed", fg='yellow')


@click.command('unsubscribe-all')
@click.option('--newsletter-email-id', type=int, required=True, help='Receiving address being retired')
def unsubscribe_all(newsletter_email_id):
    """
    Unsubscribe from every subscription delivered to a receiving address.

    Example:
        python main.py unsubscribe-all --newsletter-email-id 2
    """
    session_manager = get_cli_session_manager()

    with session_manager.get_session() as session:
        store = SubscriptionStore(session)
        newsletter_email = store.get_newsletter_email(newsletter_email_id)
        if not newsletter_email:
            click.secho(f"✗ Error: Newsletter email {newsletter_email_id} not found", fg='red')
            raise click.Abort()

        report = Unsubscriber(session, store=store).unsubscribe_all(newsletter_email)

        if report.fetch_error:
            click.secho(f"✗ Could not load subscriptions: {report.fetch_error}", fg='red')
            return

        click.echo(f"\nProcessed {report.total} subscription(s)")
        click.secho(f"  Removed: {len(report.deleted)}", fg='green')
        click.secho(f"  Marked unsubscribed: {len(report.unsubscribed)}", fg='yellow')
        if report.failed:
            click.secho(f"  Failed: {len(report.failed)}", fg='red')
            for outcome in report.failed:
                click.echo(f"    {outcome.subscription_id}: {outcome.error}")
