# Area: Shared
"""
Shared utilities.

This package contains:
- Logging configuration (colored terminal + JSON file)
"""

from .logging_config import setup_logging, log_fatal_error

__all__ = ["setup_logging", "log_fatal_error"]
