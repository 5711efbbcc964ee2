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
"""Session identifier minting.

An identifier is ``key_prefix`` followed by the URL-safe base64 encoding of
76 bytes::

    random (64) | wall clock in ns, big-endian (8) | counter, big-endian (4)

The counter comes from the shared store and never repeats within a cycle,
so two identifiers can only collide if the random part and the timestamp
collide as well.
"""

from __future__ import annotations

import base64
import secrets
import struct
import time
from collections.abc import Callable
from datetime import timedelta

from redsession.kernel.exceptions import EntropyException
from redsession.resilience.time_limiter import call_with_timeout
from redsession.session.ports.outbound import AtomicStore

ENTROPY_BYTES = 64
COUNTER_SUFFIX = "incr"

_TAIL = struct.Struct(">QI")


class IdentifierGenerator:
    """Mints unique, unguessable session identifiers in one key namespace."""

    def __init__(
        self,
        store: AtomicStore,
        key_prefix: str,
        timeout: timedelta,
        *,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self._store = store
        self._key_prefix = key_prefix
        self._counter_key = key_prefix + COUNTER_SUFFIX
        self._timeout = timeout
        self._random_bytes = random_bytes
        self._clock = clock

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    @property
    def counter_key(self) -> str:
        """The reserved key holding the shared counter."""
        return self._counter_key

    def valid(self, session_id: object) -> bool:
        """Return True if *session_id* lies in this namespace and is not the counter key."""
        return (
            isinstance(session_id, str)
            and session_id.startswith(self._key_prefix)
            and not session_id.startswith(self._counter_key)
        )

    async def new_id(self) -> str:
        """Mint a new identifier.

        Raises:
            StoreException: The counter increment failed or timed out.
            EntropyException: The random source could not supply 64 bytes.
        """
        counter = await call_with_timeout(
            self._store.increment_with_rollover(self._counter_key), self._timeout, "increment"
        )
        entropy = self._entropy()
        tail = _TAIL.pack(self._clock() & 0xFFFFFFFFFFFFFFFF, counter & 0xFFFFFFFF)
        return self._key_prefix + base64.urlsafe_b64encode(entropy + tail).decode("ascii")

    def _entropy(self) -> bytes:
        try:
            entropy = self._random_bytes(ENTROPY_BYTES)
        except (OSError, NotImplementedError) as exc:
            raise EntropyException(f"Random source failed: {exc}") from exc
        if len(entropy) != ENTROPY_BYTES:
            raise EntropyException(
                f"Random source returned {len(entropy)} of {ENTROPY_BYTES} bytes",
                context={"expected": ENTROPY_BYTES, "received": len(entropy)},
            )
        return entropy
