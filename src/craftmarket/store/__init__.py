"""Shared store client.

get_store() returns a process-wide StoreClient bound to the active domain.
"""

from craftmarket.store.client import COLLECTIONS, StoreClient

_store: StoreClient | None = None


def get_store() -> StoreClient:
    global _store
    if _store is None:
        _store = StoreClient()
    return _store


__all__ = ["COLLECTIONS", "StoreClient", "get_store"]
