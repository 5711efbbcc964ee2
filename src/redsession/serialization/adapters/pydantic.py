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
"""Pydantic serializer — typed session payloads validated on every read."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from redsession.kernel.exceptions import SerializationException

M = TypeVar("M", bound=BaseModel)


class PydanticSerializer(Generic[M]):
    """Serializer for a Pydantic model class.

    Payloads are stored as the model's JSON and re-validated on read, so a
    record written by an incompatible model version surfaces as a
    :class:`SerializationException` instead of a half-populated object.

    Args:
        model: The payload model class.
        factory: Builds the default payload for a new session id. Defaults
            to ``model()``, which requires every field to have a default.
    """

    def __init__(self, model: type[M], factory: Callable[[str], M] | None = None) -> None:
        self._model = model
        self._factory = factory

    @property
    def model(self) -> type[M]:
        return self._model

    def marshal(self, payload: M) -> bytes:
        if not isinstance(payload, self._model):
            raise SerializationException(
                f"Expected {self._model.__name__}, got {type(payload).__name__}",
                context={"model": self._model.__name__},
            )
        return payload.model_dump_json().encode()

    def unmarshal(self, raw: bytes | str) -> M:
        try:
            return self._model.model_validate_json(raw)
        except ValidationError as exc:
            raise SerializationException(
                f"Stored payload does not match {self._model.__name__}",
                context={"model": self._model.__name__, "errors": exc.error_count()},
            ) from exc

    def new(self, session_id: str) -> M:
        if self._factory is not None:
            return self._factory(session_id)
        return self._model()
