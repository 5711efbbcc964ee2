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
"""Tests for session id redaction."""

from redsession.logging.redaction import REDACTED_CHARS, SessionIdRedactor, redact_session_id

SESSION_ID = "session:" + "Ab3_-xYz" + "Q" * 90 + "=="


class TestRedactSessionId:
    def test_keeps_prefix_and_leading_characters(self):
        assert redact_session_id(SESSION_ID, "session:") == "session:Ab3_-xYz..."

    def test_short_value_is_still_marked(self):
        assert redact_session_id("session:abc", "session:") == "session:abc..."


class TestSessionIdRedactor:
    def test_rewrites_top_level_values(self):
        redactor = SessionIdRedactor(["session:"])
        event = redactor(None, "info", {"event": "session_created", "session": SESSION_ID})
        assert event == {"event": "session_created", "session": "session:Ab3_-xYz..."}

    def test_rewrites_ids_embedded_in_text(self):
        redactor = SessionIdRedactor(["session:"])
        event = redactor(None, "warning", {"event": f"lookup of {SESSION_ID} failed"})
        assert event["event"] == "lookup of session:Ab3_-xYz... failed"

    def test_rewrites_nested_values(self):
        redactor = SessionIdRedactor(["session:"])
        event = redactor(None, "info", {"event": "batch", "ids": [SESSION_ID], "ctx": {"sid": (SESSION_ID,)}})
        assert event["ids"] == ["session:Ab3_-xYz..."]
        assert event["ctx"] == {"sid": ("session:Ab3_-xYz...",)}

    def test_counter_key_and_short_values_untouched(self):
        redactor = SessionIdRedactor(["session:"])
        event = redactor(None, "info", {"event": "x", "key": "session:incr", "other": "session:abcdefgh"})
        assert event["key"] == "session:incr"
        assert event["other"] == "session:abcdefgh"

    def test_is_idempotent(self):
        redactor = SessionIdRedactor(["session:"])
        once = redactor(None, "info", {"session": SESSION_ID})["session"]
        assert redactor(None, "info", {"session": once})["session"] == once
        assert len(once) == len("session:") + REDACTED_CHARS + 3

    def test_longest_prefix_wins(self):
        redactor = SessionIdRedactor(["s:", "app:s:"])
        event = redactor(None, "info", {"session": "app:s:" + "k" * 100})
        assert event["session"] == "app:s:kkkkkkkk..."
        assert redactor.key_prefixes == ("app:s:", "s:")

    def test_no_prefixes_is_a_no_op(self):
        redactor = SessionIdRedactor(["", ""])
        assert redactor(None, "info", {"session": SESSION_ID}) == {"session": SESSION_ID}

    def test_non_string_values_pass_through(self):
        redactor = SessionIdRedactor(["session:"])
        assert redactor(None, "info", {"ttl": 60, "ok": True}) == {"ttl": 60, "ok": True}
