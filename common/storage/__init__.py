"""Storage abstraction layer for raw snapshots."""

from .backend import StorageBackend
from .local import LocalStorage

__all__ = ['StorageBackend', 'LocalStorage']
