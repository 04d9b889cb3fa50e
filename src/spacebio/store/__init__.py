"""In-memory record store."""

from spacebio.store.memory_store import MemoryStore

__all__ = ["MemoryStore"]
