"""
CLI module for the DI wiring generator.

Provides the ``wiring`` console script entry point.
"""

from .commands import main

__all__ = ["main"]
