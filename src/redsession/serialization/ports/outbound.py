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
"""Serializer protocol — the boundary between session payloads and stored bytes."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Serializer(Protocol[T]):
    """Converts a typed session payload to and from its stored representation.

    The session store never inspects payload structure; it only moves the
    marshaled value through this boundary.
    """

    def marshal(self, payload: T) -> bytes | str: ...

    def unmarshal(self, raw: bytes | str) -> T: ...

    def new(self, session_id: str) -> T: ...
