"""
Identifier providers for linkmap.

Provided providers:
- RandomIdProvider: cryptographically random string over the URL-safe alphabet (A-Za-z0-9_-), default length 7
- FixedIdProvider: always returns the same identifier (deterministic tests)
- SequentialIdProvider: monotonically increasing integer -> Base62, with optional left-pad and prefix

Common helpers:
- base62_encode: Non-negative integer -> Base62 string
- _safe_len: Resolve/normalize desired id length from argument/config (clamped to [4, 32])

Configuration (via linkmap.config.settings):
- ID_STRATEGY: "random" (default), "fixed", "sequential"
- ID_LENGTH: length for RandomIdProvider (default 7; clamped 4..32)
- FIXED_ID: value for FixedIdProvider
- SEQ_START, ID_MIN_LENGTH, ID_PREFIX: SequentialIdProvider knobs

Every provider satisfies the same capability: `provide() -> str`, with no input,
synchronous, and never failing. Operations depend on `IdProvider`, never on a
concrete class.
"""

import itertools
import logging
import random
import string
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Type

from linkmap.config import settings

log = logging.getLogger(__name__)

URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"

_BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
_BASE62_BASE = len(_BASE62_ALPHABET)


def base62_encode(num: int) -> str:
    """
    Convert a non-negative integer to a Base62 string.
    0 -> "0", 61 -> "Z", 62 -> "10"
    """
    if num < 0:
        raise ValueError("num must be non-negative")
    if num == 0:
        return "0"
    out = []
    while num > 0:
        num, rem = divmod(num, _BASE62_BASE)
        out.append(_BASE62_ALPHABET[rem])
    return "".join(reversed(out))


def _safe_len(length: Optional[int]) -> int:
    """Resolve id length from arg or config, clamped to [4, 32]."""
    L = int(length) if length is not None else int(settings.ID_LENGTH)
    return max(4, min(32, L))


class IdProvider(ABC):
    """Capability: hand out short identifiers on demand."""

    @abstractmethod  # pragma: no cover
    def provide(self) -> str:
        raise NotImplementedError


class RandomIdProvider(IdProvider):
    """
    Random identifiers of a fixed length over a URL-safe alphabet.

    Uses `random.SystemRandom` (OS entropy), so identifiers are not
    predictable from earlier ones. With 64 symbols and length 7 there are
    64**7 (~4.4e12) possible identifiers.
    """

    def __init__(self, length: Optional[int] = None, alphabet: str = URL_SAFE_ALPHABET):
        if not alphabet:
            raise ValueError("alphabet must not be empty")
        self.length = _safe_len(length)
        self.alphabet = alphabet
        self._rng = random.SystemRandom()

    def provide(self) -> str:
        return "".join(self._rng.choice(self.alphabet) for _ in range(self.length))


@dataclass(frozen=True)
class FixedIdProvider(IdProvider):
    """Always returns `value`. Meant for deterministic tests."""
    value: str

    def provide(self) -> str:
        return self.value


@dataclass
class SequentialIdProvider(IdProvider):
    """
    Sequential identifiers:
    - Maintains a process-local monotonically increasing counter
    - Encodes the next integer to Base62
    - Enforces minimum visible length via left-padding (e.g., "000abc")
    - Optionally prepends a prefix (e.g., "ap000abc")

    Collision-free within a single process; restarts begin again at `start`.
    """
    start: int = 0
    min_length: int = 7
    prefix: str = ""
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    _counter: itertools.count = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("start must be non-negative")
        self._counter = itertools.count(self.start)

    def provide(self) -> str:
        with self._lock:
            n = next(self._counter)
        code = base62_encode(n)
        if len(code) < self.min_length:
            code = code.rjust(self.min_length, "0")
        if self.prefix:
            code = f"{self.prefix}{code}"
        return code


# Provider registry and factory
PROVIDER_REGISTRY: Dict[str, Type[IdProvider]] = {
    "random": RandomIdProvider,
    "nanoid": RandomIdProvider,
    "fixed": FixedIdProvider,
    "sequential": SequentialIdProvider,
    "seq": SequentialIdProvider,
}


def get_provider_from_config(name: Optional[str] = None) -> IdProvider:
    """
    Resolve the active provider from parameter or settings.ID_STRATEGY.
    Returns a constructed provider instance wired from settings.
    """
    key = (name or settings.ID_STRATEGY or "random").strip().lower()
    cls = PROVIDER_REGISTRY.get(key)
    if cls is None:
        log.warning("Unknown id strategy %r, falling back to 'random'", key)
        cls = RandomIdProvider
    log.info("Using id strategy: %s -> %s", key, cls.__name__)

    if cls is FixedIdProvider:
        return FixedIdProvider(value=settings.FIXED_ID)
    if cls is SequentialIdProvider:
        return SequentialIdProvider(
            start=settings.SEQ_START,
            min_length=settings.ID_MIN_LENGTH,
            prefix=settings.ID_PREFIX,
        )
    return RandomIdProvider(length=settings.ID_LENGTH)
