"""
CLI module for Newsletter Subscription Manager.

Provides click-based command-line interface with subcommands.
"""

from .main import cli

__all__ = ['cli']
