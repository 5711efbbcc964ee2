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
"""StructlogAdapter — LoggingPort implementation for session-store events."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from redsession.config.properties.session import SessionProperties
from redsession.core.config import Config
from redsession.logging.redaction import SessionIdRedactor


class StructlogAdapter:
    """Logging adapter backed by structlog.

    Reads ``redsession.logging.level.root``, per-module levels under
    ``redsession.logging.level.*`` and ``redsession.logging.format``
    (``console`` or ``json``).

    Session ids are shortened before rendering. The session key prefix is
    taken from ``redsession.session.key-prefix``; further prefixes (one per
    store sharing the process) go in ``redsession.logging.redact-prefixes``.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._redactor = SessionIdRedactor([])

    @property
    def redacted_prefixes(self) -> tuple[str, ...]:
        return self._redactor.key_prefixes

    def configure(self, config: Config) -> None:
        """Configure structlog and stdlib logging from *config*."""
        level_section = dict(config.get_section("redsession.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("redsession.logging.format", "console")).lower()

        extra = config.get("redsession.logging.redact-prefixes") or []
        if isinstance(extra, str):
            extra = [p.strip() for p in extra.split(",")]
        self._redactor = SessionIdRedactor([config.bind(SessionProperties).key_prefix, *extra])

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _processors(self) -> list[structlog.types.Processor]:
        # Redaction runs last before rendering so bound context is covered too.
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer() if self._format == "json" else structlog.dev.ConsoleRenderer()
        )
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            self._redactor,
            renderer,
        ]
