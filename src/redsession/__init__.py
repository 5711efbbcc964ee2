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
"""redsession — server-side sessions on a shared, TTL-capable Redis cache.

Quick start::

    import redis.asyncio as aioredis

    from redsession import SessionStore
    from redsession.serialization.adapters.json import JsonSerializer
    from redsession.session.adapters.redis import RedisAtomicStore

    store = SessionStore(
        RedisAtomicStore(aioredis.from_url("redis://localhost:6379/0")),
        JsonSerializer(lambda session_id: {"visits": 0}),
        key_prefix="session:",
        timeout=5.0,
    )
    session_id, data = await store.get(request_cookie, ttl=1800)
"""

from redsession.core.config import Config
from redsession.kernel.exceptions import (
    EntropyException,
    InfrastructureException,
    OperationTimeoutException,
    RedSessionException,
    SerializationException,
    StoreException,
)
from redsession.serialization.ports.outbound import Serializer
from redsession.session.auto_configuration import create_session_store
from redsession.session.ports.outbound import AtomicStore
from redsession.session.store import SessionStore

__version__ = "0.1.0"

__all__ = [
    "AtomicStore",
    "Config",
    "EntropyException",
    "InfrastructureException",
    "OperationTimeoutException",
    "RedSessionException",
    "SerializationException",
    "Serializer",
    "SessionStore",
    "StoreException",
    "create_session_store",
]
