"""Data store implementations"""

from .base import Storage
from .memory import MemStorage

__all__ = ["Storage", "MemStorage"]
