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
"""JSON serializer for plain-data session payloads."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from redsession.kernel.exceptions import SerializationException

T = TypeVar("T")


class JsonSerializer(Generic[T]):
    """Serializer for any JSON-compatible payload (dicts, lists, scalars).

    Args:
        factory: Builds the default payload for a freshly minted session id.
    """

    def __init__(self, factory: Callable[[str], T]) -> None:
        self._factory = factory

    def marshal(self, payload: T) -> bytes:
        try:
            return json.dumps(payload, separators=(",", ":")).encode()
        except (TypeError, ValueError) as exc:
            raise SerializationException(f"Cannot encode session payload as JSON: {exc}") from exc

    def unmarshal(self, raw: bytes | str) -> T:
        try:
            value: Any = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise SerializationException(f"Cannot decode session payload from JSON: {exc}") from exc
        return value  # type: ignore[no-any-return]

    def new(self, session_id: str) -> T:
        return self._factory(session_id)
