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
"""SessionStore — the session facade over an atomic store and a serializer."""

from __future__ import annotations

import secrets
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import Generic, TypeVar

import structlog

from redsession.kernel.exceptions import (
    OperationTimeoutException,
    SerializationException,
    StoreException,
)
from redsession.logging.redaction import redact_session_id
from redsession.resilience.time_limiter import call_with_timeout
from redsession.serialization.ports.outbound import Serializer
from redsession.session.identifier import IdentifierGenerator
from redsession.session.ports.outbound import AtomicStore

T = TypeVar("T")
R = TypeVar("R")

logger = structlog.get_logger("redsession.session")

_DEFAULT_TTL = 1800  # 30 minutes
_DEFAULT_TIMEOUT = 5.0


def _ttl_seconds(ttl: timedelta | int) -> int:
    seconds = int(ttl.total_seconds()) if isinstance(ttl, timedelta) else int(ttl)
    if seconds < 1:
        raise ValueError(f"Session TTL must be at least one second, got {ttl!r}")
    return seconds


class SessionStore(Generic[T]):
    """Server-side sessions addressed by opaque, unguessable identifiers.

    ``get`` refreshes a session's TTL atomically with the read and silently
    replaces a missing, expired or foreign identifier with a brand-new
    session. The instance holds only immutable configuration and is safe to
    share between any number of concurrent tasks.

    Two tasks calling ``get`` with the same missing identifier each receive
    their own new session; creation on miss is not coordinated across
    callers.

    Args:
        store: Backend implementing the atomic primitives.
        serializer: Converts payloads of type ``T`` to and from stored values.
        key_prefix: Namespace for every key this store touches.
        timeout: Deadline for each individual remote call.
        default_ttl: TTL used when an operation is called without one.
        random_bytes: Entropy source for new identifiers.
    """

    def __init__(
        self,
        store: AtomicStore,
        serializer: Serializer[T],
        *,
        key_prefix: str,
        timeout: timedelta | float = _DEFAULT_TIMEOUT,
        default_ttl: timedelta | int = _DEFAULT_TTL,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        if not key_prefix:
            raise ValueError("key_prefix must be a non-empty string")
        self._store = store
        self._serializer = serializer
        self._timeout = timeout if isinstance(timeout, timedelta) else timedelta(seconds=timeout)
        self._default_ttl = _ttl_seconds(default_ttl)
        self._ids = IdentifierGenerator(store, key_prefix, self._timeout, random_bytes=random_bytes)

    @property
    def key_prefix(self) -> str:
        return self._ids.key_prefix

    @property
    def counter_key(self) -> str:
        return self._ids.counter_key

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def valid(self, session_id: object) -> bool:
        """Return True if *session_id* belongs to this store's namespace."""
        return self._ids.valid(session_id)

    async def get(self, session_id: str, ttl: timedelta | int | None = None) -> tuple[str, T]:
        """Load a session and renew its TTL, creating a new one if needed.

        Returns:
            ``(session_id, payload)`` for an existing session, or
            ``(new_session_id, serializer.new(new_session_id))`` when
            *session_id* is invalid or no longer stored.

        Raises:
            StoreException: A remote call failed or timed out.
            SerializationException: The stored value could not be decoded.
                The record's TTL has already been renewed at that point.
            EntropyException: A new identifier could not be minted safely.
        """
        ttl_seconds = self._resolve_ttl(ttl)

        if self.valid(session_id):
            raw = await self._bounded(self._store.get_and_touch(session_id, ttl_seconds), "get_and_touch")
            if raw is not None:
                return session_id, self._unmarshal(session_id, raw)

        with self._logged("new_id"):
            new_id = await self._ids.new_id()
        payload = self._serializer.new(new_id)
        await self._write(new_id, payload, ttl_seconds)
        logger.debug("session_created", session=redact_session_id(new_id, self.key_prefix), ttl=ttl_seconds)
        return new_id, payload

    async def set(self, session_id: str, payload: T, ttl: timedelta | int | None = None) -> None:
        """Replace the session's payload and reset its TTL. Last writer wins.

        The payload is marshaled before the store is contacted; a
        serialization failure leaves the stored record untouched.
        """
        await self._write(session_id, payload, self._resolve_ttl(ttl))

    async def delete(self, session_id: str) -> None:
        """Delete a session. Invalid identifiers are ignored."""
        if not self.valid(session_id):
            return
        await self._bounded(self._store.delete(session_id), "delete")

    async def expire(self, session_id: str, ttl: timedelta | int | None = None) -> None:
        """Renew a session's TTL without reading it. Invalid identifiers are ignored."""
        if not self.valid(session_id):
            return
        await self._bounded(self._store.expire(session_id, self._resolve_ttl(ttl)), "expire")

    def _resolve_ttl(self, ttl: timedelta | int | None) -> int:
        return self._default_ttl if ttl is None else _ttl_seconds(ttl)

    async def _write(self, session_id: str, payload: T, ttl_seconds: int) -> None:
        try:
            raw = self._serializer.marshal(payload)
        except SerializationException:
            raise
        except Exception as exc:
            raise SerializationException(f"Cannot marshal session payload: {exc}") from exc
        await self._bounded(self._store.set_with_ttl(session_id, raw, ttl_seconds), "set")

    def _unmarshal(self, session_id: str, raw: bytes | str) -> T:
        try:
            return self._serializer.unmarshal(raw)
        except SerializationException as exc:
            self._log_decode_failure(session_id, exc)
            raise
        except Exception as exc:
            self._log_decode_failure(session_id, exc)
            raise SerializationException(f"Cannot unmarshal session payload: {exc}") from exc

    def _log_decode_failure(self, session_id: str, exc: Exception) -> None:
        logger.warning("session_decode_failed", session=redact_session_id(session_id, self.key_prefix), error=str(exc))

    async def _bounded(self, awaitable: Awaitable[R], operation: str) -> R:
        with self._logged(operation):
            return await call_with_timeout(awaitable, self._timeout, operation)

    @contextmanager
    def _logged(self, operation: str) -> Iterator[None]:
        try:
            yield
        except OperationTimeoutException:
            logger.warning("store_call_timed_out", operation=operation, timeout=self._timeout.total_seconds())
            raise
        except StoreException as exc:
            logger.warning("store_call_failed", operation=operation, error=str(exc))
            raise
