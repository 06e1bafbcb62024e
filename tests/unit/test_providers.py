"""
Unit tests for linkmap.ids.providers.

Covers:
    - RandomIdProvider: length, charset, diversity, clamping
    - FixedIdProvider: constant output
    - SequentialIdProvider: uniqueness, padding, prefix, thread safety
    - base62_encode edge cases
    - get_provider_from_config registry resolution
"""

import re
import threading

import pytest

from linkmap.config import settings
from linkmap.ids.providers import (
    FixedIdProvider,
    IdProvider,
    RandomIdProvider,
    SequentialIdProvider,
    base62_encode,
    get_provider_from_config,
)

URL_SAFE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def test_random_provider_length_charset_and_diversity():
    p = RandomIdProvider()
    samples = [p.provide() for _ in range(500)]
    assert all(len(x) == settings.ID_LENGTH and URL_SAFE_PATTERN.match(x) for x in samples)
    assert len(set(samples)) == len(samples)


@pytest.mark.parametrize("requested,expected", [(1, 4), (7, 7), (12, 12), (100, 32)])
def test_random_provider_length_is_clamped(requested, expected):
    assert len(RandomIdProvider(length=requested).provide()) == expected


def test_random_provider_custom_alphabet():
    p = RandomIdProvider(length=10, alphabet="ab")
    assert set(p.provide()) <= {"a", "b"}


def test_random_provider_rejects_empty_alphabet():
    with pytest.raises(ValueError):
        RandomIdProvider(alphabet="")


def test_fixed_provider_always_same():
    p = FixedIdProvider("123")
    assert [p.provide() for _ in range(3)] == ["123", "123", "123"]


def test_sequential_uniqueness_and_padding():
    s = SequentialIdProvider(start=1000, min_length=6)
    seen = set()
    for _ in range(5000):
        code = s.provide()
        assert len(code) >= 6
        assert code not in seen
        seen.add(code)


def test_sequential_first_values():
    s = SequentialIdProvider(start=0, min_length=3)
    assert [s.provide() for _ in range(3)] == ["000", "001", "002"]


def test_sequential_prefix():
    s = SequentialIdProvider(start=1000, min_length=6, prefix="ap")
    c = s.provide()
    assert c.startswith("ap")
    assert len(c) >= 2 + 6


def test_sequential_rejects_negative_start():
    with pytest.raises(ValueError):
        SequentialIdProvider(start=-1)


def test_sequential_instances_do_not_share_lock_or_counter():
    a = SequentialIdProvider(start=0, min_length=1)
    b = SequentialIdProvider(start=0, min_length=1)
    assert a._lock is not b._lock
    assert a.provide() == b.provide() == "0"


def test_sequential_is_thread_safe():
    s = SequentialIdProvider(start=0, min_length=1)
    results = []
    lock = threading.Lock()

    def worker():
        local = [s.provide() for _ in range(500)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8 * 500
    assert len(set(results)) == len(results)


def test_base62_progression_sanity():
    assert base62_encode(0) == "0"
    assert base62_encode(61) == "Z"
    assert base62_encode(62) == "10"


def test_base62_rejects_negative():
    with pytest.raises(ValueError, match="non-negative"):
        base62_encode(-1)


@pytest.mark.parametrize(
    "name,cls",
    [
        ("random", RandomIdProvider),
        ("nanoid", RandomIdProvider),
        ("fixed", FixedIdProvider),
        ("sequential", SequentialIdProvider),
        ("SEQ", SequentialIdProvider),
    ],
)
def test_get_provider_from_config_by_name(name, cls):
    provider = get_provider_from_config(name)
    assert isinstance(provider, cls)
    assert isinstance(provider, IdProvider)


def test_get_provider_fixed_uses_settings_value(monkeypatch):
    monkeypatch.setattr(settings, "FIXED_ID", "abc1234")
    assert get_provider_from_config("fixed").provide() == "abc1234"


def test_get_provider_unknown_falls_back_to_random():
    assert isinstance(get_provider_from_config("nosuch"), RandomIdProvider)


def test_get_provider_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(settings, "ID_STRATEGY", "sequential")
    assert isinstance(get_provider_from_config(), SequentialIdProvider)
