"""
Provisioning of receiving mailbox addresses for users.
"""

import re
import secrets
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Config
from .exceptions import PersistenceError
from .models import NewsletterEmail, User


def _local_part_for(user: User) -> str:
    local = user.email.split('@', 1)[0].lower()
    local = re.sub(r'[^a-z0-9]+', '-', local).strip('-')
    return local or 'user'


def create_newsletter_email(session: Session, user_id: int, domain: Optional[str] = None) -> NewsletterEmail:
    """
    Create a new receiving address for a user.

    Addresses look like ``<local-part>-<random>@<domain>`` where the local
    part comes from the user's own email.

    Raises:
        PersistenceError: If the user does not exist or the insert fails
    """
    domain = domain or Config.NEWSLETTER_EMAIL_DOMAIN

    try:
        user = session.query(User).filter_by(id=user_id).first()
        if user is None:
            raise PersistenceError('User not found', operation='create_newsletter_email',
                                   details={'user_id': user_id})

        newsletter_email = NewsletterEmail(
            user_id=user.id,
            address=f"{_local_part_for(user)}-{secrets.token_hex(4)}@{domain}"
        )
        session.add(newsletter_email)
        session.commit()
        return newsletter_email
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f'Failed to create newsletter email: {e}',
                               operation='create_newsletter_email',
                               details={'user_id': user_id}) from e
