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
"""Per-call deadline for remote store operations."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from datetime import timedelta
from typing import TypeVar

from redsession.kernel.exceptions import OperationTimeoutException

T = TypeVar("T")


async def call_with_timeout(awaitable: Awaitable[T], timeout: timedelta, operation: str) -> T:
    """Await *awaitable*, cancelling it if it runs longer than *timeout*.

    Args:
        awaitable: The remote call to bound.
        timeout: Maximum time allowed for the call to complete.
        operation: Name of the operation, used in the error message.

    Raises:
        OperationTimeoutException: If the call exceeds the timeout.
    """
    timeout_seconds = timeout.total_seconds()
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except TimeoutError as exc:
        raise OperationTimeoutException(
            f"{operation} exceeded timeout of {timeout_seconds}s",
            context={"operation": operation, "timeout": timeout_seconds},
        ) from exc
