"""
In-memory mapping store for linkmap.

Responsibilities:
    - Hold identifier -> full URL mappings for the lifetime of the process
    - Serve concurrent reads and writes from many request threads
    - Offer an atomic insert-if-absent for collision-free creation

Design:
    - Keys are spread over N shards, each a plain dict behind its own
      threading.Lock. A key always lands in the same shard (crc32 of the key),
      so unrelated keys rarely contend and no operation ever holds two locks.
    - Every mutation and lookup of a key happens under that key's shard lock,
      which gives per-key atomic writes and read-after-write visibility.
    - No ordering is promised across different keys.
    - Nothing is persisted; a restart starts empty.
"""

import threading
import zlib
from typing import Dict, List, Optional

from linkmap.errors import NotFound
from .base import MappingStore


class _Shard:
    __slots__ = ("lock", "data")

    def __init__(self):
        self.lock = threading.Lock()
        self.data: Dict[str, str] = {}


class InMemoryMappingStore(MappingStore):
    def __init__(self, shards: int = 16):
        """
        Initialize an empty, sharded store.

        Args:
            shards (int): Number of independently locked partitions (>= 1).

        Raises:
            ValueError: if `shards` is less than 1.
        """
        if shards < 1:
            raise ValueError("shards must be >= 1")
        self._shards: List[_Shard] = [_Shard() for _ in range(shards)]

    @property
    def shard_count(self) -> int:
        return len(self._shards)

    def _shard_for(self, id: str) -> _Shard:
        # crc32 is stable across processes, unlike hash() under PYTHONHASHSEED
        return self._shards[zlib.crc32(id.encode("utf-8")) % len(self._shards)]

    # ---- Writer capability ------------------------------------------------

    def save(self, full_url: str, id: str) -> None:
        """Insert or overwrite the mapping for `id` (last-write-wins)."""
        shard = self._shard_for(id)
        with shard.lock:
            shard.data[id] = full_url

    def save_if_absent(self, full_url: str, id: str) -> bool:
        """Insert only when `id` is free. Returns False if it was taken."""
        shard = self._shard_for(id)
        with shard.lock:
            if id in shard.data:
                return False
            shard.data[id] = full_url
            return True

    # ---- Reader capability ------------------------------------------------

    def get(self, id: str) -> str:
        """Return the URL for `id` or raise NotFound."""
        shard = self._shard_for(id)
        with shard.lock:
            url: Optional[str] = shard.data.get(id)
        if url is None:
            raise NotFound(f"no mapping for id {id!r}")
        return url

    # ---- Introspection ----------------------------------------------------

    def __contains__(self, id: object) -> bool:
        if not isinstance(id, str):
            return False
        shard = self._shard_for(id)
        with shard.lock:
            return id in shard.data

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.data)
        return total

    def snapshot(self) -> Dict[str, str]:
        """
        Return a plain dict copy of all mappings.

        Each shard is copied under its own lock; the result is consistent per
        shard, not across shards taken at one instant.
        """
        out: Dict[str, str] = {}
        for shard in self._shards:
            with shard.lock:
                out.update(shard.data)
        return out
