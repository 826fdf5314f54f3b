"""
Unsubscribe orchestration.

Decides how to unsubscribe from one subscription, runs the attempt and
reconciles the stored row:

- RSS subscriptions have no provider to notify and are deleted outright.
- Newsletter subscriptions with a mailto target get an unsubscribe email
  sent from their receiving address; the row is deleted when the email
  goes out.
- Anything unconfirmed is kept and demoted to UNSUBSCRIBED.

HTTP unsubscribe URLs are not requested automatically: most of them land
on a page that needs a click before the provider acts, so a bare GET
would report success without unsubscribing.
"""

from sqlalchemy.orm import Session

from src.database.models import NewsletterEmail, Subscription, SubscriptionStatus
from src.database.subscription_store import SubscriptionStore
from src.unsubscribe_executor.email_executor import EmailUnsubscribeExecutor
from src.utils.logging import SubscriptionLogger
from .types import (
    BulkUnsubscribeReport, UnsubscribeOutcome,
    OUTCOME_DELETED, OUTCOME_ERROR, OUTCOME_UNSUBSCRIBED
)


class Unsubscriber:
    """Single and bulk unsubscribe workflows over a SubscriptionStore."""

    def __init__(
        self,
        session: Session,
        email_executor: EmailUnsubscribeExecutor = None,
        store: SubscriptionStore = None
    ):
        """
        Args:
            session: Database session
            email_executor: Executor used for mailto unsubscribes
            store: Store adapter (built from the session when omitted)
        """
        self.store = store or SubscriptionStore(session)
        self.email_executor = email_executor or EmailUnsubscribeExecutor()
        self.logger = SubscriptionLogger("unsubscriber")

    def _attempt_newsletter_unsubscribe(self, subscription: Subscription) -> bool:
        newsletter_email = subscription.newsletter_email
        if not subscription.unsubscribe_mail_to or newsletter_email is None:
            return False

        result = self.email_executor.execute(
            subscription.unsubscribe_mail_to,
            from_address=newsletter_email.address
        )
        return result.success

    def unsubscribe(self, subscription: Subscription) -> UnsubscribeOutcome:
        """
        Unsubscribe from one subscription.

        Performs exactly one status update or one delete. Store failures
        propagate as PersistenceError.

        Returns:
            UnsubscribeOutcome with action 'deleted' or 'unsubscribed'
        """
        subscription_id = subscription.id
        subscription_type = subscription.type

        if subscription.is_newsletter():
            if not self._attempt_newsletter_unsubscribe(subscription):
                self.logger.info("Failed to unsubscribe", {"subscription_id": subscription_id})
                self.store.update_status(subscription_id, SubscriptionStatus.UNSUBSCRIBED)
                return UnsubscribeOutcome(subscription_id, OUTCOME_UNSUBSCRIBED)

        self.store.delete(subscription_id)
        self.logger.info("Subscription deleted", {
            "subscription_id": subscription_id, "type": subscription_type
        })
        return UnsubscribeOutcome(subscription_id, OUTCOME_DELETED)

    def unsubscribe_all(self, newsletter_email: NewsletterEmail) -> BulkUnsubscribeReport:
        """
        Unsubscribe from everything delivered to a receiving address.

        Subscriptions are processed one at a time; a failing item is logged
        and recorded without stopping the rest. Never raises.
        """
        newsletter_email_id = None
        try:
            newsletter_email_id = newsletter_email.id
            subscriptions = self.store.list_for_newsletter_email(
                newsletter_email_id, newsletter_email.user_id
            )
        except Exception as e:
            self.logger.log_exception(e, {"newsletter_email_id": newsletter_email_id})
            self.logger.info("Failed to unsubscribe all", {"newsletter_email_id": newsletter_email_id})
            return BulkUnsubscribeReport(newsletter_email_id=newsletter_email_id, fetch_error=str(e))

        report = BulkUnsubscribeReport(newsletter_email_id=newsletter_email_id)

        with self.logger.scoped_context({"newsletter_email_id": newsletter_email_id}), \
                self.logger.timed("unsubscribe_all"):
            # Ids are read up front; every commit below expires loaded rows
            pending = [(subscription.id, subscription) for subscription in subscriptions]
            for subscription_id, subscription in pending:
                try:
                    report.outcomes.append(self.unsubscribe(subscription))
                except Exception as e:
                    self.logger.log_exception(e, {"subscription_id": subscription_id})
                    report.outcomes.append(
                        UnsubscribeOutcome(subscription_id, OUTCOME_ERROR, error=str(e))
                    )

            self.logger.info("Unsubscribe all finished", {
                "total": report.total,
                "deleted": len(report.deleted),
                "unsubscribed": len(report.unsubscribed),
                "failed": len(report.failed),
            })
        return report
