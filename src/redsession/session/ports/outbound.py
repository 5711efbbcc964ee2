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
"""Atomic store protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

COUNTER_CEILING = 4_000_000_000
"""The counter key is deleted by the increment that takes it above this value."""


@runtime_checkable
class AtomicStore(Protocol):
    """Remote key-value store with TTLs and the two atomic session primitives.

    ``increment_with_rollover`` and ``get_and_touch`` must each execute as a
    single indivisible unit on the store. All backends (Redis, in-memory)
    must implement this protocol.
    """

    async def increment_with_rollover(self, counter_key: str) -> int: ...

    async def get_and_touch(self, key: str, ttl_seconds: int) -> bytes | str | None: ...

    async def set_with_ttl(self, key: str, value: bytes | str, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def expire(self, key: str, ttl_seconds: int) -> None: ...
