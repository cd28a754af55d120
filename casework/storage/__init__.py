from .base import MonotonicClock, Storage
from .memory import MemoryStorage
from .mongo import MongoStorage

__all__ = ["MemoryStorage", "MongoStorage", "MonotonicClock", "Storage"]
