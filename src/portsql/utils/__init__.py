"""
Utility helpers shared across portsql packages.
"""

from .logging import configure_logging, get_logger, time_call
from .patterns import render_pattern

__all__ = ["configure_logging", "get_logger", "render_pattern", "time_call"]
