"""
CLI session management utilities.
"""

from contextlib import contextmanager
from typing import Generator
from sqlalchemy.orm import Session

from .database import DatabaseManager


class CLISessionManager:
    """Hands out database sessions to CLI commands."""

    def __init__(self, database_url: str = None):
        self.db_manager = DatabaseManager(database_url)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session, rolled back on error and always closed."""
        session = self.db_manager.get_session()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global CLI session manager instance
_cli_session_manager = None


def get_cli_session_manager(database_url: str = None) -> CLISessionManager:
    """Get the global CLI session manager instance."""
    global _cli_session_manager
    if _cli_session_manager is None:
        _cli_session_manager = CLISessionManager(database_url)
    return _cli_session_manager
