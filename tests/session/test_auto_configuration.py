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
"""Tests for building a SessionStore from configuration."""

from __future__ import annotations

from datetime import timedelta

import pytest
import redis.asyncio as aioredis

from redsession.core.config import Config
from redsession.serialization.adapters.json import JsonSerializer
from redsession.session.adapters.memory import InMemoryAtomicStore
from redsession.session.adapters.redis import RedisAtomicStore
from redsession.session.auto_configuration import create_session_store


def _serializer() -> JsonSerializer[dict]:
    return JsonSerializer(lambda sid: {})


class TestCreateSessionStore:
    def test_defaults(self):
        store = create_session_store(Config({}), _serializer())
        assert isinstance(store._store, RedisAtomicStore)
        assert isinstance(store._store.client, aioredis.Redis)
        assert store.key_prefix == "session:"
        assert store.timeout == timedelta(seconds=5)
        assert store.default_ttl == 1800

    def test_memory_store_with_properties(self):
        config = Config(
            {
                "redsession": {
                    "session": {"store": "memory", "key-prefix": "app:sess:", "timeout": 0.5, "ttl": 600}
                }
            }
        )
        store = create_session_store(config, _serializer())

        assert isinstance(store._store, InMemoryAtomicStore)
        assert store.key_prefix == "app:sess:"
        assert store.counter_key == "app:sess:incr"
        assert store.timeout == timedelta(seconds=0.5)
        assert store.default_ttl == 600

    def test_explicit_client_wins(self, fake_redis):
        config = Config({"redsession": {"session": {"store": "memory"}}})
        store = create_session_store(config, _serializer(), client=fake_redis)

        assert isinstance(store._store, RedisAtomicStore)
        assert store._store.client is fake_redis

    def test_unknown_store_rejected(self):
        config = Config({"redsession": {"session": {"store": "memcached"}}})
        with pytest.raises(ValueError, match="memcached"):
            create_session_store(config, _serializer())

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("REDSESSION_SESSION_TIMEOUT", "1.5")
        monkeypatch.setenv("REDSESSION_SESSION_STORE", "memory")

        store = create_session_store(Config({}), _serializer())
        assert store.timeout == timedelta(seconds=1.5)
        assert isinstance(store._store, InMemoryAtomicStore)

    def test_placeholders_resolved_in_properties(self, monkeypatch):
        monkeypatch.setenv("REDSESSION_TEST_CACHE_URL", "redis://cache.internal:6380/3")
        config = Config(
            {
                "redsession": {
                    "session": {
                        "key-prefix": "${REDSESSION_TEST_UNSET_APP:shop}:s:",
                        "redis": {"url": "${REDSESSION_TEST_CACHE_URL}"},
                    }
                }
            }
        )
        store = create_session_store(config, _serializer())

        assert store.key_prefix == "shop:s:"
        kwargs = store._store.client.connection_pool.connection_kwargs
        assert (kwargs["host"], kwargs["port"], kwargs["db"]) == ("cache.internal", 6380, 3)

    def test_env_overrides_redis_url(self, monkeypatch):
        monkeypatch.setenv("REDSESSION_SESSION_REDIS_URL", "redis://from-env:6381/0")
        config = Config({"redsession": {"session": {"redis": {"url": "redis://localhost:6379/0"}}}})
        store = create_session_store(config, _serializer())

        assert store._store.client.connection_pool.connection_kwargs["host"] == "from-env"

    def test_env_replacing_redis_section_rejected(self, monkeypatch):
        monkeypatch.setenv("REDSESSION_SESSION_REDIS", "redis://elsewhere")
        with pytest.raises(ValueError, match="REDSESSION_SESSION_REDIS"):
            create_session_store(Config({}), _serializer())

    async def test_built_store_serves_sessions(self, fake_redis):
        config = Config({"redsession": {"session": {"key-prefix": "web:"}}})
        store = create_session_store(config, _serializer(), client=fake_redis)

        session_id, data = await store.get("nope")
        assert session_id.startswith("web:")
        assert data == {}
        assert fake_redis.ttl(session_id) == 1800
