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
"""Exception hierarchy for redsession.

Every error raised by the library derives from :class:`RedSessionException`,
so callers can handle all of them with a single ``except`` clause or pick the
specific branch they care about.
"""

from __future__ import annotations


class RedSessionException(Exception):
    """Base exception for all redsession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "STORE_ERROR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(RedSessionException):
    """Failures outside the caller's control: remote store, entropy source."""


class StoreException(InfrastructureException):
    """The remote store reported a failure (connection, protocol, script error)."""

    def __init__(self, message: str, code: str | None = "STORE_ERROR", context: dict | None = None) -> None:
        super().__init__(message, code=code, context=context)


class OperationTimeoutException(StoreException):
    """A remote store call exceeded its per-call deadline and was cancelled."""

    def __init__(self, message: str, code: str | None = "STORE_TIMEOUT", context: dict | None = None) -> None:
        super().__init__(message, code=code, context=context)


class EntropyException(InfrastructureException):
    """The random source could not supply the full amount of entropy."""

    def __init__(self, message: str, code: str | None = "ENTROPY_ERROR", context: dict | None = None) -> None:
        super().__init__(message, code=code, context=context)


# =============================================================================
# Payload Exceptions
# =============================================================================


class SerializationException(RedSessionException):
    """A session payload could not be marshaled or unmarshaled."""

    def __init__(
        self, message: str, code: str | None = "SERIALIZATION_ERROR", context: dict | None = None
    ) -> None:
        super().__init__(message, code=code, context=context)
