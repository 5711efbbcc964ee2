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
"""Session store construction from configuration."""

from __future__ import annotations

from typing import Any, TypeVar

import redis.asyncio as aioredis

from redsession.config.properties.session import SessionProperties
from redsession.core.config import Config
from redsession.serialization.ports.outbound import Serializer
from redsession.session.adapters.memory import InMemoryAtomicStore
from redsession.session.adapters.redis import RedisAtomicStore
from redsession.session.ports.outbound import AtomicStore
from redsession.session.store import SessionStore

T = TypeVar("T")


def create_atomic_store(properties: SessionProperties, client: Any | None = None) -> AtomicStore:
    """Build the backend named by ``redsession.session.store``.

    An explicit *client* always selects the Redis backend and is used as-is;
    otherwise a client is created from ``redsession.session.redis.url``.
    """
    if client is not None:
        return RedisAtomicStore(client)

    store_type = properties.store.lower()
    if store_type == "redis":
        url = str(properties.redis.get("url", "redis://localhost:6379/0"))
        return RedisAtomicStore(aioredis.from_url(url))  # type: ignore[no-untyped-call,unused-ignore]
    if store_type == "memory":
        return InMemoryAtomicStore()
    raise ValueError(f"Unknown session store '{properties.store}', expected 'redis' or 'memory'")


def create_session_store(config: Config, serializer: Serializer[T], *, client: Any | None = None) -> SessionStore[T]:
    """Build a :class:`SessionStore` from the ``redsession.session`` config section."""
    properties = config.bind(SessionProperties)
    return SessionStore(
        create_atomic_store(properties, client),
        serializer,
        key_prefix=properties.key_prefix,
        timeout=float(properties.timeout),
        default_ttl=int(properties.ttl),
    )
