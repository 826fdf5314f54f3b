"""
Base Subscribe Handler

Shared signup workflow for third-party newsletter providers:
- Resolve (or provision) the user's receiving address
- Delegate the provider call to the subclass
- Store one ACTIVE subscription per newsletter the provider enabled

Subclasses only implement ``_subscribe(email)``, a single outbound request
returning the names of the newsletters it activated.
"""

from typing import Callable, List, Optional

import requests
from sqlalchemy.orm import Session

from src.config import Config
from src.database.models import NewsletterEmail, Subscription
from src.database.newsletter_emails import create_newsletter_email
from src.database.subscription_store import SubscriptionStore
from src.utils.logging import SubscriptionLogger


class SubscribeHandler:
    """Base class for provider signup strategies."""

    # Registry key, set by each provider
    key = None

    def __init__(
        self,
        session: Session,
        http: Optional[requests.Session] = None,
        provision_newsletter_email: Optional[Callable[[Session, int], NewsletterEmail]] = None,
        timeout: Optional[float] = None
    ):
        """
        Args:
            session: Database session
            http: requests session used for the provider call
            provision_newsletter_email: Creates a receiving address for a user
            timeout: Provider request timeout in seconds
        """
        self.session = session
        self.store = SubscriptionStore(session)
        self.http = http or requests.Session()
        self.provision_newsletter_email = provision_newsletter_email or create_newsletter_email
        self.timeout = timeout or Config.SIGNUP_HTTP_TIMEOUT
        self.logger = SubscriptionLogger(f"signup.{self.key or 'base'}")

    def _resolve_newsletter_email(self, user_id: int) -> NewsletterEmail:
        newsletter_email = self.store.find_newsletter_email(user_id)
        if newsletter_email is None:
            newsletter_email = self.provision_newsletter_email(self.session, user_id)
            self.logger.info("Newsletter email created", {
                "user_id": user_id, "address": newsletter_email.address
            })
        return newsletter_email

    def handle_subscribe(self, user_id: int, name: str) -> Optional[List[Subscription]]:
        """
        Sign a user up with this provider and record the subscriptions.

        Args:
            user_id: User to subscribe
            name: Provider key the handler was looked up by

        Returns:
            Created subscriptions, or None when the signup failed
        """
        try:
            newsletter_email = self._resolve_newsletter_email(user_id)

            subscribed_names = self.subscribe(newsletter_email.address)
            if not subscribed_names:
                self.logger.info("Failed to get subscribe response", {"provider": name, "user_id": user_id})
                return None

            subscriptions = [
                self.store.create_subscription(user_id, subscribed_name, newsletter_email.id)
                for subscribed_name in subscribed_names
            ]
            self.logger.info("Subscribed to newsletters", {
                "provider": name, "user_id": user_id, "newsletters": subscribed_names
            })
            return subscriptions
        except Exception as e:
            self.logger.log_exception(e, {"provider": name, "user_id": user_id})
            self.logger.info("Failed to handle subscribe", {"provider": name, "user_id": user_id})
            return None

    def subscribe(self, email: str) -> List[str]:
        """
        Run the provider call for an address.

        Returns:
            Newsletter names activated, empty when the request failed
        """
        try:
            return self._subscribe(email)
        except requests.exceptions.RequestException as e:
            self.logger.info("Provider request failed", {"provider": self.key, "error": str(e)})
            return []

    def _subscribe(self, email: str) -> List[str]:
        """Provider-specific signup request. The base handler subscribes to nothing."""
        return []
