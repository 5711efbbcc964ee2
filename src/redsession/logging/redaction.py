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
"""Session id redaction for log output.

Session identifiers are bearer credentials. Anything that reaches a log
line keeps the key prefix and the first few identifier characters only.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, MutableMapping
from typing import Any

REDACTED_CHARS = 8

_ID_CHARS = r"[A-Za-z0-9_\-]"


def redact_session_id(session_id: str, key_prefix: str) -> str:
    """Shorten *session_id* to the key prefix plus ``REDACTED_CHARS`` characters."""
    return session_id[: len(key_prefix) + REDACTED_CHARS] + "..."


class SessionIdRedactor:
    """structlog processor that shortens session ids in every event value.

    A value is rewritten wherever one of *key_prefixes* is followed by more
    than ``REDACTED_CHARS`` identifier characters, so the counter key and
    already-redacted ids pass through unchanged. Strings nested in dicts,
    lists and tuples are rewritten too.
    """

    def __init__(self, key_prefixes: Iterable[str]) -> None:
        prefixes = sorted({p for p in key_prefixes if p}, key=len, reverse=True)
        self._prefixes = tuple(prefixes)
        self._pattern = (
            re.compile(
                "(" + "|".join(re.escape(p) for p in prefixes) + ")"
                rf"({_ID_CHARS}{{{REDACTED_CHARS}}}){_ID_CHARS}[A-Za-z0-9_\-=]*"
            )
            if prefixes
            else None
        )

    @property
    def key_prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    def __call__(self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        if self._pattern is None:
            return event_dict
        for key, value in event_dict.items():
            event_dict[key] = self._redact(value)
        return event_dict

    def _redact(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._pattern.sub(r"\1\2...", value)  # type: ignore[union-attr]
        if isinstance(value, dict):
            return {k: self._redact(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._redact(v) for v in value]
        if isinstance(value, tuple):
            return tuple(self._redact(v) for v in value)
        return value
