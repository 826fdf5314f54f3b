"""
Parsing of mailto-style unsubscribe targets.
"""

from urllib.parse import parse_qs

from .exceptions import InvalidAddressError
from .types import UnsubscribeAddress

DEFAULT_UNSUBSCRIBE_SUBJECT = 'Unsubscribe'


def parse_unsubscribe_mailto(value: str) -> UnsubscribeAddress:
    """
    Split an unsubscribe target such as ``list@example.com?subject=Bye``.

    The ``mailto:`` scheme is optional. The subject comes from the
    ``subject`` query parameter and defaults to "Unsubscribe".

    Raises:
        InvalidAddressError: If the address part is empty or has no '@'
    """
    target = value or ''
    if target[:7].lower() == 'mailto:':
        target = target[7:]

    to, _, query = target.partition('?')
    subject = parse_qs(query).get('subject', [''])[0] or DEFAULT_UNSUBSCRIBE_SUBJECT

    if not to or '@' not in to:
        raise InvalidAddressError('Invalid unsubscribe email address', address=value)

    return UnsubscribeAddress(to=to, subject=subject)
