"""
Configuration settings for the newsletter subscription manager.
"""

import os
from pathlib import Path

from dotenv import load_dotenv


class Config:
    """Configuration settings, read from the environment by ``load()``."""

    @classmethod
    def load(cls):
        """(Re)read every setting from the current environment."""
        # Database settings
        cls.DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///subscriptions.db')

        # Unsubscribe settings
        cls.UNSUBSCRIBE_HTTP_TIMEOUT = float(os.getenv('UNSUBSCRIBE_HTTP_TIMEOUT', '5.0'))
        cls.UNSUBSCRIBE_EMAIL_TEXT = os.getenv(
            'UNSUBSCRIBE_EMAIL_TEXT',
            'This message was automatically generated by Newsletter Subscription Manager.'
        )
        cls.USER_AGENT = os.getenv('USER_AGENT', 'NewsletterSubscriptionManager/1.0')

        # Signup settings
        cls.SIGNUP_HTTP_TIMEOUT = float(os.getenv('SIGNUP_HTTP_TIMEOUT', '30'))
        cls.NEWSLETTER_EMAIL_DOMAIN = os.getenv('NEWSLETTER_EMAIL_DOMAIN', 'inbox.example.com')

        # SMTP settings for unsubscribe emails
        cls.SMTP_HOST = os.getenv('SMTP_HOST', 'localhost')
        cls.SMTP_PORT = int(os.getenv('SMTP_PORT', '587'))
        cls.SMTP_USERNAME = os.getenv('SMTP_USERNAME')
        cls.SMTP_PASSWORD = os.getenv('SMTP_PASSWORD')
        cls.SMTP_TIMEOUT = int(os.getenv('SMTP_TIMEOUT', '30'))
        cls.SMTP_USE_TLS = os.getenv('SMTP_USE_TLS', 'true').lower() == 'true'

        # Logging settings
        cls.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        cls.LOG_FORMAT = os.getenv('LOG_FORMAT', 'json')

    @classmethod
    def get_data_dir(cls) -> Path:
        """Get the data directory for storing the database and logs."""
        data_dir = Path(os.getenv('DATA_DIR', Path.cwd() / 'data'))
        data_dir.mkdir(exist_ok=True)
        return data_dir

    @classmethod
    def get_database_url(cls) -> str:
        """Get the database URL, placing relative SQLite files in the data directory."""
        if cls.DATABASE_URL.startswith('sqlite:///'):
            db_file = cls.DATABASE_URL[10:]  # Remove 'sqlite:///'
            if db_file != ':memory:' and not os.path.isabs(db_file):
                db_path = cls.get_data_dir() / db_file
                return f"sqlite:///{db_path}"
        return cls.DATABASE_URL


Config.load()


def load_config_from_env_file(env_file: str = '.env'):
    """Load configuration from environment file."""
    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(env_path)
        Config.load()
