"""
Storage factory – pick the mapping store backend from config
============================================================

Centralizes selection of the storage backend so the rest of the app can stay
ignorant of where mappings live.

- Reads environment **at call time** to avoid stale values in tests.
- Only "memory" ships today; anything else is rejected loudly instead of
  silently falling back.

Environment variables
---------------------
- LINKMAP_STORAGE_BACKEND: "memory" (default)
- LINKMAP_STORE_SHARDS:    shard count for the memory backend (see config)
"""

import logging
import os
from typing import Optional

from linkmap.config import settings
from linkmap.storage.memory import InMemoryMappingStore

log = logging.getLogger(__name__)


def get_store(backend: Optional[str] = None, **kwargs) -> InMemoryMappingStore:
    """
    Return a mapping store based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default). If omitted, reads LINKMAP_STORAGE_BACKEND,
        falling back to settings.STORAGE_BACKEND.
    kwargs : dict
        Extra args passed to the backend constructor, e.g. shards=32.

    Raises
    ------
    ValueError
        For an unknown backend name.
    """
    # Read env **now** to avoid capturing stale values at import time
    be = (backend or os.getenv("LINKMAP_STORAGE_BACKEND") or settings.STORAGE_BACKEND).strip().lower()
    log.info("Selected storage backend: %r", be)

    if be == "memory":
        shards = kwargs.get("shards")
        if shards is None:
            shards = settings.STORE_SHARDS
        return InMemoryMappingStore(shards=shards)

    raise ValueError(f"Unknown storage backend: {be!r}")
