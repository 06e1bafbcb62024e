"""
Runtime configuration for linkmap
=================================

Simple settings module that reads from environment variables (only here),
and exposes a stable `settings` object for the rest of the codebase.
Avoid reading env vars anywhere else; import from this module instead.
The one exception is the storage factory, which reads its backend lazily.

Server
------
- LINKMAP_HOST            : bind address (default "0.0.0.0")
- LINKMAP_PORT            : listening port (default 3000)
- LINKMAP_LOG_LEVEL       : root log level (default "INFO"); unknown names fall back to INFO

Storage
-------
- LINKMAP_STORAGE_BACKEND : "memory" (default)
- LINKMAP_STORE_SHARDS    : number of lock-guarded shards; default 16, clamped to [1, 1024]

Identifier strategy
-------------------
- LINKMAP_ID_STRATEGY     : one of "random" (default), "fixed", "sequential"
- LINKMAP_ID_LENGTH       : random id length; default 7; clamped to [4, 32]
- LINKMAP_FIXED_ID        : value returned by the "fixed" strategy
- LINKMAP_SEQ_START       : starting integer for the sequential counter (default 0)
- LINKMAP_ID_MIN_LENGTH   : minimum visible length for sequential ids (default 7)
- LINKMAP_ID_PREFIX       : optional prefix for sequential ids
- LINKMAP_MAX_ID_ATTEMPTS : identifier attempts per create on collision (default 5, min 1)
"""

import os

# names understood by both logging.basicConfig and uvicorn
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _get_level(name: str, default: str) -> str:
    raw = os.getenv(name, default).strip().upper()
    return raw if raw in _LOG_LEVELS else default


class _Settings:
    # -------- Server --------
    HOST: str = os.getenv("LINKMAP_HOST", "0.0.0.0")
    PORT: int = _get_int("LINKMAP_PORT", 3000)
    LOG_LEVEL: str = _get_level("LINKMAP_LOG_LEVEL", "INFO")

    # -------- Storage --------
    STORAGE_BACKEND: str = os.getenv("LINKMAP_STORAGE_BACKEND", "memory").strip().lower()
    STORE_SHARDS: int = max(1, min(1024, _get_int("LINKMAP_STORE_SHARDS", 16)))

    # -------- Identifier generation --------
    ID_STRATEGY: str = os.getenv("LINKMAP_ID_STRATEGY", "random").strip().lower()
    ID_LENGTH: int = max(4, min(32, _get_int("LINKMAP_ID_LENGTH", 7)))
    FIXED_ID: str = os.getenv("LINKMAP_FIXED_ID", "fixed")

    SEQ_START: int = max(0, _get_int("LINKMAP_SEQ_START", 0))
    ID_MIN_LENGTH: int = max(1, min(32, _get_int("LINKMAP_ID_MIN_LENGTH", 7)))
    ID_PREFIX: str = os.getenv("LINKMAP_ID_PREFIX", "")

    MAX_ID_ATTEMPTS: int = max(1, _get_int("LINKMAP_MAX_ID_ATTEMPTS", 5))


settings = _Settings()
