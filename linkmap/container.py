"""
Composition root for linkmap.

Builds one identifier provider and one mapping store, and wires the same store
instance into both operations so that a mapping written by create-mapping is
visible to resolve-mapping. There is no module-level store: every container
owns its own, which keeps app instances (and tests) isolated.
"""

from dataclasses import dataclass
from typing import Optional

from linkmap.ids.providers import IdProvider, get_provider_from_config
from linkmap.operations.create_mapping import CreateMapping
from linkmap.operations.resolve_mapping import ResolveMapping
from linkmap.storage.base import MappingStore
from linkmap.storage.storage_factory import get_store


@dataclass
class Container:
    store: MappingStore
    create_mapping: CreateMapping
    resolve_mapping: ResolveMapping


def build_container(
    id_provider: Optional[IdProvider] = None,
    store: Optional[MappingStore] = None,
    max_attempts: Optional[int] = None,
) -> Container:
    """
    Wire providers, store and operations.

    Args:
        id_provider: Provider to use; defaults to the one named by config.
        store: Store to share; defaults to `get_store()`.
        max_attempts: Passed through to CreateMapping.
    """
    store = store if store is not None else get_store()
    id_provider = id_provider if id_provider is not None else get_provider_from_config()
    return Container(
        store=store,
        create_mapping=CreateMapping(id_provider, store, max_attempts=max_attempts),
        resolve_mapping=ResolveMapping(store),
    )
