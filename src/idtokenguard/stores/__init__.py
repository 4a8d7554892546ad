from ._key_set_store import InMemoryKeySetStore, KeySetStore

__all__ = ["InMemoryKeySetStore", "KeySetStore"]
