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
"""Shared fixtures: a FakeRedis stub and store backends on a manual clock."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from redsession.session.adapters.memory import InMemoryAtomicStore
from redsession.session.adapters.redis import (
    GET_AND_TOUCH_SCRIPT,
    INCREMENT_WITH_ROLLOVER_SCRIPT,
    RedisAtomicStore,
)
from redsession.session.ports.outbound import COUNTER_CEILING


class ManualClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface.

    ``register_script`` understands the two session scripts and returns a
    callable that runs them, as redis-py does. Every call is recorded in
    ``calls``; setting ``fail_with`` makes every call raise that exception and
    ``delay`` makes every call sleep first.
    """

    def __init__(self, clock: ManualClock) -> None:
        self._clock = clock
        self._store: dict[str, bytes] = {}
        self._expiry: dict[str, float] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.fail_with: Exception | None = None
        self.delay: float = 0.0
        self.closed = False
        self.registered: list[str] = []

    async def _enter(self, *call: Any) -> None:
        self.calls.append(call)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

    def _purge(self, key: str) -> None:
        expires_at = self._expiry.get(key)
        if expires_at is not None and self._clock() >= expires_at:
            self._store.pop(key, None)
            self._expiry.pop(key, None)

    def _del(self, key: str) -> int:
        self._purge(key)
        self._expiry.pop(key, None)
        return 1 if self._store.pop(key, None) is not None else 0

    def _expire(self, key: str, seconds: int) -> int:
        self._purge(key)
        if key not in self._store:
            return 0
        self._expiry[key] = self._clock() + int(seconds)
        return 1

    def register_script(self, script: str) -> _FakeScript:
        self.registered.append(script)
        return _FakeScript(self, script)

    async def _evalsha(self, script: str, keys: list[str], args: list[Any]) -> Any:
        await self._enter("evalsha", script, len(keys), *keys, *args)
        key = keys[0]
        if script == INCREMENT_WITH_ROLLOVER_SCRIPT:
            self._purge(key)
            value = int(self._store.get(key, b"0")) + 1
            self._store[key] = str(value).encode()
            if value > COUNTER_CEILING:
                self._del(key)
            return value
        if script == GET_AND_TOUCH_SCRIPT:
            self._expire(key, int(args[0]))
            return self._store.get(key)
        raise AssertionError(f"unexpected script: {script}")

    async def get(self, key: str) -> bytes | None:
        await self._enter("get", key)
        self._purge(key)
        return self._store.get(key)

    async def set(self, key: str, value: bytes | str, ex: int | None = None) -> bool:
        await self._enter("set", key, value, ex)
        self._store[key] = value.encode() if isinstance(value, str) else value
        self._expiry.pop(key, None)
        if ex is not None:
            self._expiry[key] = self._clock() + ex
        return True

    async def delete(self, *keys: str) -> int:
        await self._enter("delete", *keys)
        return sum(self._del(k) for k in keys)

    async def expire(self, key: str, seconds: int) -> bool:
        await self._enter("expire", key, seconds)
        return bool(self._expire(key, seconds))

    async def ping(self) -> bool:
        await self._enter("ping")
        return True

    async def aclose(self) -> None:
        self.closed = True

    def ttl(self, key: str) -> int:
        """Remaining seconds like Redis TTL: -2 if missing, -1 if persistent."""
        self._purge(key)
        if key not in self._store:
            return -2
        if key not in self._expiry:
            return -1
        return round(self._expiry[key] - self._clock())

    def seed(self, key: str, value: bytes) -> None:
        self._store[key] = value


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def fake_redis(clock: ManualClock) -> FakeRedis:
    return FakeRedis(clock)


@pytest.fixture
def redis_store(fake_redis: FakeRedis) -> RedisAtomicStore:
    return RedisAtomicStore(fake_redis)


@pytest.fixture
def memory_store(clock: ManualClock) -> InMemoryAtomicStore:
    return InMemoryAtomicStore(clock=clock)


class _FakeScript:
    """Stand-in for ``redis.commands.core.AsyncScript``."""

    def __init__(self, redis: FakeRedis, script: str) -> None:
        self._redis = redis
        self.script = script

    async def __call__(self, keys: Any = (), args: Any = (), client: Any = None) -> Any:
        return await self._redis._evalsha(self.script, list(keys), list(args))
