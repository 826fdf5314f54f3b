"""
Newsletter Signup Module

Signs users up to third-party newsletters and records the resulting
subscriptions.
"""

from .base_handler import SubscribeHandler
from .providers import AxiosEssentialsHandler, MorningBrewHandler, MilkRoadHandler, MoneyStuffHandler
from .registry import SUBSCRIBE_HANDLERS, get_subscribe_handler, list_providers

__all__ = [
    'SubscribeHandler', 'AxiosEssentialsHandler', 'MorningBrewHandler',
    'MilkRoadHandler', 'MoneyStuffHandler',
    'SUBSCRIBE_HANDLERS', 'get_subscribe_handler', 'list_providers',
]
