#!/usr/bin/env python3
"""
Command-line entry point for the newsletter subscription manager.

Usage:
    python main.py init
    python main.py user add reader@example.com
    python main.py newsletter-email add --user-id 1
    python main.py subscribe --user-id 1 --provider morning_brew
    python main.py list-subscriptions --user-id 1
    python main.py unsubscribe --id 3
    python main.py unsubscribe-all --newsletter-email-id 1
"""

from src.config import Config, load_config_from_env_file
from src.utils.logging import configure_logging
from src.cli import cli


def main():
    """Main CLI entry point."""
    load_config_from_env_file()
    configure_logging(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)
    cli()


if __name__ == '__main__':
    main()
