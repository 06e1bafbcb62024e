"""
Global pytest fixtures for the linkmap test suite.

Responsibilities:
    - Provide a fresh in-memory store per test
    - Provide operations wired to that store (random and fixed providers)
    - Provide a FastAPI TestClient built by the app factory around a known container

Using `create_app(container)` means every test owns its store, so no state
leaks between tests.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from linkmap.container import Container, build_container
from linkmap.ids.providers import FixedIdProvider, RandomIdProvider
from linkmap.operations.create_mapping import CreateMapping
from linkmap.operations.resolve_mapping import ResolveMapping
from linkmap.storage.memory import InMemoryMappingStore


@pytest.fixture
def store() -> InMemoryMappingStore:
    """Fresh sharded in-memory store."""
    return InMemoryMappingStore(shards=8)


@pytest.fixture
def create(store) -> CreateMapping:
    """Create-mapping wired to the store with the production random provider."""
    return CreateMapping(RandomIdProvider(length=7), store)


@pytest.fixture
def resolve(store) -> ResolveMapping:
    return ResolveMapping(store)


@pytest.fixture
def container(store) -> Container:
    return build_container(id_provider=RandomIdProvider(), store=store)


@pytest.fixture
def client(container) -> TestClient:
    """TestClient around a fresh app sharing the `store` fixture."""
    return TestClient(create_app(container))


@pytest.fixture
def fixed_client(store) -> TestClient:
    """TestClient whose provider always hands out 'test-id'."""
    store.save("test-url-2", "test-id-2")
    container = build_container(id_provider=FixedIdProvider("test-id"), store=store)
    return TestClient(create_app(container))
