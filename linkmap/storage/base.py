"""
Storage capability interfaces for linkmap.

Purpose:
    Define two narrow contracts so each operation depends only on what it
    uses: create-mapping needs a `MappingWriter`, resolve-mapping needs a
    `MappingReader`. Any backend (in-memory, Redis, SQL) can implement them
    without changes to the operations.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover`.
"""

from abc import ABC, abstractmethod


class MappingWriter(ABC):
    """Write side of the mapping store."""

    @abstractmethod  # pragma: no cover
    def save(self, full_url: str, id: str) -> None:
        """
        Insert or overwrite the mapping for `id` (last-write-wins).

        Must be safe under concurrent calls with distinct or identical keys;
        readers observe either the previous or the new value, never a mixture.

        Raises:
            StoreFailure: if the backend cannot complete the write.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def save_if_absent(self, full_url: str, id: str) -> bool:
        """
        Atomically insert the mapping only if `id` is not mapped yet.

        Returns:
            bool: True if written, False if `id` was already taken
                  (the existing mapping is left untouched).

        Raises:
            StoreFailure: if the backend cannot complete the write.
        """
        raise NotImplementedError


class MappingReader(ABC):
    """Read side of the mapping store."""

    @abstractmethod  # pragma: no cover
    def get(self, id: str) -> str:
        """
        Return the full URL stored for `id`.

        Once a write for `id` has returned, this observes it.

        Raises:
            NotFound: if `id` has no mapping.
            StoreFailure: if the backend cannot complete the read.
        """
        raise NotImplementedError


class MappingStore(MappingWriter, MappingReader, ABC):
    """Convenience base for backends that implement both capabilities."""
