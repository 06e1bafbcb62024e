"""
Resolve-mapping operation for linkmap.

A single read through the injected MappingReader; the stored URL (or the
reader's NotFound) is returned unmodified. Any string is a legal identifier.
"""

from linkmap.storage.base import MappingReader


class ResolveMapping:
    def __init__(self, reader: MappingReader):
        self.reader = reader

    def execute(self, id: str) -> str:
        """
        Return the full URL mapped to `id`.

        Raises:
            NotFound: if `id` has no mapping.
        """
        return self.reader.get(id)
