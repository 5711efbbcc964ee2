# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""In-memory atomic store with TTL-based expiry."""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Callable

from redsession.session.ports.outbound import COUNTER_CEILING


class InMemoryAtomicStore:
    """In-memory atomic store with TTL support and asyncio.Lock for atomicity.

    Suitable for development, testing, and single-process applications.
    Sessions are not shared between processes.

    Expiry is lazy: an expired entry is dropped only when its key is
    touched again. Sessions that are never looked up after they expire
    stay in memory until then, so a long-lived process with many abandoned
    sessions grows without bound. Use the Redis store there.

    Args:
        clock: Monotonic time source in seconds; injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, tuple[bytes | str | int, float | None]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    def _live(self, key: str) -> tuple[bytes | str | int, float | None] | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._store[key]
            return None
        return entry

    async def increment_with_rollover(self, counter_key: str) -> int:
        async with self._lock:
            entry = self._live(counter_key)
            value = int(entry[0]) + 1 if entry is not None else 1
            if value > COUNTER_CEILING:
                self._store.pop(counter_key, None)
            else:
                self._store[counter_key] = (value, entry[1] if entry is not None else None)
            return value

    async def get_and_touch(self, key: str, ttl_seconds: int) -> bytes | str | None:
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                return None
            value = entry[0]
            self._store[key] = (value, self._clock() + ttl_seconds)
            return value if not isinstance(value, int) else str(value)

    async def set_with_ttl(self, key: str, value: bytes | str, ttl_seconds: int) -> None:
        async with self._lock:
            self._store[key] = (value, self._clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._store.pop(key, None)

    async def expire(self, key: str, ttl_seconds: int) -> None:
        async with self._lock:
            entry = self._live(key)
            if entry is not None:
                self._store[key] = (entry[0], self._clock() + ttl_seconds)

    async def ttl(self, key: str) -> int | None:
        """Remaining whole seconds before *key* expires, or ``None`` if absent or persistent."""
        async with self._lock:
            entry = self._live(key)
            if entry is None or entry[1] is None:
                return None
            return math.ceil(entry[1] - self._clock())

    async def exists(self, key: str) -> bool:
        async with self._lock:
            return self._live(key) is not None
