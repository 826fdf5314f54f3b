"""
Outcome records produced by the unsubscribe orchestrator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


OUTCOME_DELETED = 'deleted'            # Provider notified (or RSS), row removed
OUTCOME_UNSUBSCRIBED = 'unsubscribed'  # Unconfirmed, row kept with UNSUBSCRIBED status
OUTCOME_ERROR = 'error'                # Processing raised; row state unknown


@dataclass(frozen=True)
class UnsubscribeOutcome:
    """What happened to one subscription."""

    subscription_id: int
    action: str
    error: Optional[str] = None

    @property
    def deleted(self) -> bool:
        return self.action == OUTCOME_DELETED

    def to_dict(self) -> Dict[str, Any]:
        result = {'subscription_id': self.subscription_id, 'action': self.action}
        if self.error:
            result['error'] = self.error
        return result


@dataclass
class BulkUnsubscribeReport:
    """Per-item outcomes of unsubscribing everything tied to one receiving address."""

    newsletter_email_id: Optional[int]
    outcomes: List[UnsubscribeOutcome] = field(default_factory=list)
    fetch_error: Optional[str] = None

    def _with_action(self, action: str) -> List[UnsubscribeOutcome]:
        return [outcome for outcome in self.outcomes if outcome.action == action]

    @property
    def deleted(self) -> List[UnsubscribeOutcome]:
        return self._with_action(OUTCOME_DELETED)

    @property
    def unsubscribed(self) -> List[UnsubscribeOutcome]:
        return self._with_action(OUTCOME_UNSUBSCRIBED)

    @property
    def failed(self) -> List[UnsubscribeOutcome]:
        return self._with_action(OUTCOME_ERROR)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'newsletter_email_id': self.newsletter_email_id,
            'total': self.total,
            'deleted': len(self.deleted),
            'unsubscribed': len(self.unsubscribed),
            'failed': len(self.failed),
            'fetch_error': self.fetch_error,
            'outcomes': [outcome.to_dict() for outcome in self.outcomes],
        }
