from .base import Base
from .storage_item import StorageItem

__all__ = [
    "Base",
    "StorageItem",
]
