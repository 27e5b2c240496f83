# Services Module
from .mirror import CartMirror
from .storage import KeyValueStore, MemoryStore, RedisStore, WriteResult

__all__ = ["CartMirror", "KeyValueStore", "MemoryStore", "RedisStore", "WriteResult"]
