"""
Main CLI group for Newsletter Subscription Manager.

Integrates all command groups into a single CLI application.
"""

import click
from .commands.admin import init, user, newsletter_email
from .commands.subscription import list_subscriptions, save_subscription
from .commands.action import unsubscribe, unsubscribe_all
from .commands.signup import subscribe, providers


@click.group()
@click.version_option(version='1.0.0', prog_name='Newsletter Subscription Manager')
def cli():
    """
    Newsletter Subscription Manager - track, unsubscribe from and sign up to newsletters.
    """
    pass


# Register command groups
cli.add_command(user, name='user')
cli.add_command(newsletter_email, name='newsletter-email')

# Register standalone commands
cli.add_command(init, name='init')
cli.add_command(list_subscriptions, name='list-subscriptions')
cli.add_command(save_subscription, name='save-subscription')
cli.add_command(unsubscribe, name='unsubscribe')
cli.add_command(unsubscribe_all, name='unsubscribe-all')
cli.add_command(subscribe, name='subscribe')
cli.add_command(providers, name='providers')


if __name__ == '__main__':
    cli()
