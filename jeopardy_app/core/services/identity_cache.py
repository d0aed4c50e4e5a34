"""Contestant identity: who is behind a given connection.

Architecture note:
    Contestants have no accounts. A connection is recognised by the key an
    ``IdentityResolver`` derives from the request; the default resolver uses
    the raw client address, which collides for clients behind a shared NAT.
    Swapping in a cookie or token based resolver only touches the server
    wiring, the game session works with opaque keys.
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Callable, Protocol

from cachetools import TTLCache

from jeopardy_app.constants.game_constants import (
    IDENTITY_CACHE_MAX_ENTRIES,
    IDENTITY_TTL_SECONDS,
)
from jeopardy_app.core.errors import IdentityUnavailableError


class IdentityResolver(Protocol):
    def resolve(self, client_address: str | None) -> str:
        """Return the identity key for a caller or raise ``IdentityUnavailableError``."""
        ...


class AddressIdentityResolver:
    """Uses the client's network address as its identity key."""

    def resolve(self, client_address: str | None) -> str:
        if client_address is None or not client_address.strip():
            raise IdentityUnavailableError("Could not get IP address")
        return client_address.strip()


class IdentityCache:
    """Thread-safe identity key -> display name map with per-entry expiry."""

    def __init__(
        self,
        ttl_seconds: float = IDENTITY_TTL_SECONDS,
        max_entries: int = IDENTITY_CACHE_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("Identity TTL must be a positive number of seconds.")
        self._entries: TTLCache[str, str] = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=timer)
        self._lock = Lock()

    def remember(self, key: str, display_name: str) -> None:
        with self._lock:
            self._entries[key] = display_name

    def lookup(self, key: str) -> str | None:
        """Return the display name for ``key``; expired entries count as missing."""
        with self._lock:
            return self._entries.get(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
