"""
Subscription store adapter.

Wraps the SQLAlchemy session with the lookups and writes the unsubscribe
and signup workflows need. Every SQLAlchemy failure is rolled back and
surfaced as a PersistenceError so callers only deal with one error type.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from src.utils.logging import SubscriptionLogger
from .exceptions import PersistenceError, SubscriptionConflictError
from .models import NewsletterEmail, Subscription, SubscriptionStatus, SubscriptionType


@dataclass(frozen=True)
class SaveSubscriptionInput:
    """Metadata captured when a newsletter arrives for a user."""

    user_id: int
    name: str
    newsletter_email_id: int
    unsubscribe_mail_to: Optional[str] = None
    unsubscribe_http_url: Optional[str] = None
    icon: Optional[str] = None

    def metadata(self) -> dict:
        """Mutable fields that were supplied, ready for an update."""
        fields = {
            'unsubscribe_mail_to': self.unsubscribe_mail_to,
            'unsubscribe_http_url': self.unsubscribe_http_url,
            'icon': self.icon,
        }
        return {key: value for key, value in fields.items() if value is not None}


class SubscriptionStore:
    """Lookup, insert, update and delete of Subscription rows."""

    def __init__(self, session: Session):
        self.session = session
        self.logger = SubscriptionLogger("store")

    @contextmanager
    def _guard(self, operation: str, **details):
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            raise SubscriptionConflictError(
                'Unique constraint violated', operation=operation, details=details
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(
                f'Store operation failed: {e}', operation=operation, details=details
            ) from e

    def get(self, subscription_id: int) -> Optional[Subscription]:
        """Get a subscription by id."""
        with self._guard('get', subscription_id=subscription_id):
            return self.session.query(Subscription).filter_by(id=subscription_id).first()

    def find_by_name_and_user(self, name: str, user_id: int) -> Optional[Subscription]:
        """Find a user's newsletter subscription by name."""
        with self._guard('find_by_name_and_user', name=name, user_id=user_id):
            return self.session.query(Subscription).filter_by(
                name=name,
                user_id=user_id,
                type=SubscriptionType.NEWSLETTER
            ).first()

    def list_for_user(
        self,
        user_id: int,
        status: Optional[str] = None,
        subscription_type: Optional[str] = None
    ) -> List[Subscription]:
        """List a user's subscriptions, optionally filtered by status and type."""
        with self._guard('list_for_user', user_id=user_id):
            query = self.session.query(Subscription).filter_by(user_id=user_id)
            if status:
                query = query.filter_by(status=status)
            if subscription_type:
                query = query.filter_by(type=subscription_type)
            return query.order_by(Subscription.id).all()

    def list_for_newsletter_email(self, newsletter_email_id: int, user_id: int) -> List[Subscription]:
        """All subscriptions delivered to a receiving address, with that address loaded."""
        with self._guard('list_for_newsletter_email',
                         newsletter_email_id=newsletter_email_id, user_id=user_id):
            return self.session.query(Subscription).options(
                joinedload(Subscription.newsletter_email)
            ).filter_by(
                user_id=user_id,
                newsletter_email_id=newsletter_email_id
            ).order_by(Subscription.id).all()

    def save_subscription(self, data: SaveSubscriptionInput) -> int:
        """
        Insert or refresh a newsletter subscription.

        An existing (user, name, NEWSLETTER) row gets the supplied metadata and
        a new last_fetched_at; otherwise an ACTIVE row is created.

        Returns:
            Id of the stored subscription
        """
        existing = self.find_by_name_and_user(data.name, data.user_id)
        if existing:
            return self._refresh(existing, data)

        subscription = Subscription(
            user_id=data.user_id,
            name=data.name,
            newsletter_email_id=data.newsletter_email_id,
            type=SubscriptionType.NEWSLETTER,
            status=SubscriptionStatus.ACTIVE,
            last_fetched_at=datetime.now(),
            **data.metadata()
        )
        try:
            with self._guard('save_subscription', name=data.name, user_id=data.user_id):
                self.session.add(subscription)
                self.session.commit()
        except SubscriptionConflictError:
            # Lost an insert race; the winner's row gets refreshed instead
            existing = self.find_by_name_and_user(data.name, data.user_id)
            if existing is None:
                raise
            return self._refresh(existing, data)

        self.logger.info("Subscription created", {
            "subscription_id": subscription.id, "name": data.name, "user_id": data.user_id
        })
        return subscription.id

    def _refresh(self, subscription: Subscription, data: SaveSubscriptionInput) -> int:
        with self._guard('save_subscription', subscription_id=subscription.id):
            for key, value in data.metadata().items():
                setattr(subscription, key, value)
            subscription.last_fetched_at = datetime.now()
            self.session.commit()
        return subscription.id

    def create_subscription(self, user_id: int, name: str, newsletter_email_id: int) -> Subscription:
        """
        Create an ACTIVE newsletter subscription.

        When the (user, name) row already exists, from an earlier signup or a
        concurrent insert, it is reactivated and moved to the given receiving
        address instead.
        """
        subscription = Subscription(
            user_id=user_id,
            name=name,
            newsletter_email_id=newsletter_email_id,
            type=SubscriptionType.NEWSLETTER,
            status=SubscriptionStatus.ACTIVE,
        )
        try:
            with self._guard('create_subscription', name=name, user_id=user_id):
                self.session.add(subscription)
                self.session.commit()
        except SubscriptionConflictError:
            existing = self.find_by_name_and_user(name, user_id)
            if existing is None:
                raise
            with self._guard('create_subscription', subscription_id=existing.id):
                existing.status = SubscriptionStatus.ACTIVE
                existing.newsletter_email_id = newsletter_email_id
                self.session.commit()
            self.logger.info("Subscription reactivated", {
                "subscription_id": existing.id, "name": name, "user_id": user_id
            })
            return existing
        return subscription

    def update_status(self, subscription_id: int, status: str) -> None:
        """Set the status of a subscription."""
        with self._guard('update_status', subscription_id=subscription_id, status=status):
            self.session.query(Subscription).filter_by(id=subscription_id).update(
                {'status': status}, synchronize_session='fetch'
            )
            self.session.commit()

    def delete(self, subscription_id: int) -> None:
        """Delete a subscription."""
        with self._guard('delete', subscription_id=subscription_id):
            self.session.query(Subscription).filter_by(id=subscription_id).delete(
                synchronize_session='fetch'
            )
            self.session.commit()

    def find_newsletter_email(self, user_id: int) -> Optional[NewsletterEmail]:
        """Get the first receiving address owned by a user."""
        with self._guard('find_newsletter_email', user_id=user_id):
            return self.session.query(NewsletterEmail).filter_by(
                user_id=user_id
            ).order_by(NewsletterEmail.id).first()

    def get_newsletter_email(self, newsletter_email_id: int) -> Optional[NewsletterEmail]:
        """Get a receiving address by id."""
        with self._guard('get_newsletter_email', newsletter_email_id=newsletter_email_id):
            return self.session.query(NewsletterEmail).filter_by(id=newsletter_email_id).first()
