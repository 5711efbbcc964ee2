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
"""Redis-backed atomic store."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, cast

from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from redsession.kernel.exceptions import OperationTimeoutException, StoreException
from redsession.session.ports.outbound import COUNTER_CEILING

INCREMENT_WITH_ROLLOVER_SCRIPT = (
    f"local v=redis.call('incr',KEYS[1]) if v>{COUNTER_CEILING} then redis.call('del',KEYS[1]) end return v"
)

GET_AND_TOUCH_SCRIPT = "redis.call('expire',KEYS[1],ARGV[1]) return redis.call('get',KEYS[1])"


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except RedisTimeoutError as exc:
        raise OperationTimeoutException(
            f"Redis {operation} timed out: {exc}", context={"operation": operation}
        ) from exc
    except RedisError as exc:
        raise StoreException(f"Redis {operation} failed: {exc}", context={"operation": operation}) from exc


class RedisAtomicStore:
    """Atomic store that delegates to a ``redis.asyncio.Redis``-like client.

    The two session primitives run as Lua scripts so that the server
    executes each of them as one indivisible unit. Both are registered once
    with ``register_script`` and invoked by SHA with ``EVALSHA``; redis-py
    reloads a script transparently when the server answers ``NOSCRIPT``
    (after a restart or ``SCRIPT FLUSH``). Every
    ``RedisError`` raised by the client is re-raised as a
    :class:`StoreException`.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._increment = client.register_script(INCREMENT_WITH_ROLLOVER_SCRIPT)
        self._get_and_touch = client.register_script(GET_AND_TOUCH_SCRIPT)

    @property
    def client(self) -> Any:
        return self._client

    async def increment_with_rollover(self, counter_key: str) -> int:
        """Increment the counter, deleting it once it passes the ceiling."""
        with _translate_errors("increment"):
            value = await self._increment(keys=[counter_key])
        return int(value)

    async def get_and_touch(self, key: str, ttl_seconds: int) -> bytes | str | None:
        """Refresh the key's expiry and return its value, or ``None`` if absent."""
        with _translate_errors("get_and_touch"):
            value = await self._get_and_touch(keys=[key], args=[ttl_seconds])
        return cast("bytes | str | None", value)

    async def set_with_ttl(self, key: str, value: bytes | str, ttl_seconds: int) -> None:
        with _translate_errors("set"):
            await self._client.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        with _translate_errors("delete"):
            await self._client.delete(key)

    async def expire(self, key: str, ttl_seconds: int) -> None:
        with _translate_errors("expire"):
            await self._client.expire(key, ttl_seconds)

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        with _translate_errors("ping"):
            await self._client.ping()

    async def stop(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
