"""
Lookup of signup handlers by provider key.
"""

from typing import Dict, List, Optional, Type

from sqlalchemy.orm import Session

from .base_handler import SubscribeHandler
from .providers import (
    AxiosEssentialsHandler, MilkRoadHandler, MorningBrewHandler, MoneyStuffHandler
)

SUBSCRIBE_HANDLERS: Dict[str, Type[SubscribeHandler]] = {
    handler.key: handler
    for handler in (AxiosEssentialsHandler, MorningBrewHandler, MilkRoadHandler, MoneyStuffHandler)
}


def get_subscribe_handler(name: str, session: Session, **kwargs) -> Optional[SubscribeHandler]:
    """
    Build the handler registered under a provider key.

    Args:
        name: Provider key, matched case-insensitively
        session: Database session for the handler
        **kwargs: Passed to the handler constructor (http, timeout, ...)

    Returns:
        Handler instance, or None for an unknown provider
    """
    handler_class = SUBSCRIBE_HANDLERS.get((name or '').lower())
    if handler_class is None:
        return None
    return handler_class(session, **kwargs)


def list_providers() -> List[str]:
    """Registered provider keys."""
    return sorted(SUBSCRIBE_HANDLERS)
