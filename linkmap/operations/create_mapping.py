"""
Create-mapping operation for linkmap.

Responsibilities:
    - Validate and canonicalize the incoming URL
    - Obtain an identifier from the injected IdProvider
    - Persist (canonical URL, identifier) through the injected MappingWriter
    - Return the identifier

Design notes:
    - Depends on capabilities (IdProvider, MappingWriter), never on concrete
      stores or providers, so backends and test doubles are swapped by
      construction.
    - Validation runs before anything else: an invalid URL never reaches
      the provider or the store.
    - Writes use insert-if-absent. If the provider hands out an identifier
      that is already mapped, a fresh one is requested (bounded by
      `max_attempts`); an existing mapping is never overwritten.
    - Store failures propagate unchanged; retrying them is the store
      adapter's business.
    - Stateless between calls; safe to share across request threads.
"""

import logging
from typing import Optional

from linkmap.config import settings
from linkmap.errors import StoreFailure
from linkmap.ids.providers import IdProvider
from linkmap.storage.base import MappingWriter
from linkmap.urls import canonicalize_url

log = logging.getLogger(__name__)


class CreateMapping:
    """Shorten a URL: validate, allocate an identifier, store the pair."""

    def __init__(
        self,
        id_provider: IdProvider,
        writer: MappingWriter,
        max_attempts: Optional[int] = None,
    ):
        """
        Args:
            id_provider (IdProvider): Source of fresh identifiers.
            writer (MappingWriter): Write capability of the shared store.
            max_attempts (Optional[int]): Identifiers to try before giving up
                on collisions. Defaults to settings.MAX_ID_ATTEMPTS.
        """
        attempts = settings.MAX_ID_ATTEMPTS if max_attempts is None else max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.id_provider = id_provider
        self.writer = writer
        self.max_attempts = attempts

    def execute(self, full_url: str) -> str:
        """
        Create a mapping for `full_url` and return its identifier.

        Raises:
            InvalidInput: if `full_url` is not a well-formed absolute URL
                (no side effects happen in that case).
            StoreFailure: if the store fails, or no free identifier was
                found within `max_attempts`.
        """
        canonical = canonicalize_url(full_url)

        for attempt in range(1, self.max_attempts + 1):
            id = self.id_provider.provide()
            if self.writer.save_if_absent(canonical, id):
                log.debug("Created mapping %s -> %s", id, canonical)
                return id
            log.warning(
                "Identifier collision on %r (attempt %d/%d)", id, attempt, self.max_attempts
            )

        raise StoreFailure(
            f"identifier space exhausted after {self.max_attempts} attempts"
        )
