"""
linkmap package initializer.
"""

from . import ids
from . import operations
from . import storage

__all__ = ["ids", "operations", "storage"]
