"""
Database models for the newsletter subscription manager.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, ForeignKey,
    create_engine, Index
)
from sqlalchemy.orm import relationship, sessionmaker, declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class SubscriptionType:
    """Kinds of subscription a user can hold."""
    NEWSLETTER = 'NEWSLETTER'
    RSS = 'RSS'


class SubscriptionStatus:
    """Lifecycle states of a stored subscription."""
    ACTIVE = 'ACTIVE'
    UNSUBSCRIBED = 'UNSUBSCRIBED'


class User(Base):
    """Read-it-later user owning subscriptions and newsletter inboxes."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255))
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    newsletter_emails = relationship("NewsletterEmail", back_populates="user", cascade="all, delete-orphan")
    subscriptions = relationship("Subscription", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(email='{self.email}')>"


class NewsletterEmail(Base):
    """Receiving mailbox address newsletters are delivered to."""
    __tablename__ = 'newsletter_emails'

    id = Column(Integer, primary_key=True)
    address = Column(String(255), unique=True, nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, default=func.now())

    # Relationships
    user = relationship("User", back_populates="newsletter_emails")
    subscriptions = relationship("Subscription", back_populates="newsletter_email")

    __table_args__ = (
        Index('idx_newsletter_email_user', 'user_id'),
    )

    def __repr__(self):
        return f"<NewsletterEmail(address='{self.address}')>"


class Subscription(Base):
    """Newsletter or RSS subscription held by a user."""
    __tablename__ = 'subscriptions'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default=SubscriptionType.NEWSLETTER)  # NEWSLETTER, RSS
    status = Column(String(20), nullable=False, default=SubscriptionStatus.ACTIVE)  # ACTIVE, UNSUBSCRIBED
    newsletter_email_id = Column(Integer, ForeignKey('newsletter_emails.id'))  # NEWSLETTER rows only
    unsubscribe_mail_to = Column(Text)  # address[?subject=...]
    unsubscribe_http_url = Column(Text)
    icon = Column(Text)
    url = Column(Text)  # Feed URL for RSS rows
    last_fetched_at = Column(DateTime)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="subscriptions")
    newsletter_email = relationship("NewsletterEmail", back_populates="subscriptions")

    __table_args__ = (
        Index('idx_subscription_newsletter_email', 'newsletter_email_id'),
        Index('idx_subscription_status', 'user_id', 'status'),
        # One row per user/name/type; re-subscribing updates it
        Index('uq_user_name_type_subscription', 'user_id', 'name', 'type', unique=True),
    )

    def is_newsletter(self) -> bool:
        """Check if this subscription is delivered by email."""
        return self.type == SubscriptionType.NEWSLETTER

    def is_active(self) -> bool:
        """Check if this subscription is still active."""
        return self.status == SubscriptionStatus.ACTIVE

    def __repr__(self):
        return f"<Subscription(name='{self.name}', type='{self.type}', status='{self.status}')>"


def create_database_engine(database_url: str = "sqlite:///subscriptions.db"):
    """Create and return a database engine."""
    engine = create_engine(
        database_url,
        echo=False,  # Set to True for SQL debugging
        pool_pre_ping=True,
        connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    return engine


def create_tables(engine):
    """Create all tables in the database."""
    Base.metadata.create_all(engine)


def get_session_maker(engine):
    """Get a session maker for the database."""
    return sessionmaker(bind=engine)
