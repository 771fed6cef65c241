"""Utility modules for Cascada.

Provides:
- hashing: node_key for cache keys
- logger: get_logger for logging
"""

from cascada.utils.hashing import node_key
from cascada.utils.logger import get_logger

__all__ = [
    "get_logger",
    "node_key",
]
