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
"""Tests for the redsession exception hierarchy."""

import pytest

from redsession.kernel.exceptions import (
    EntropyException,
    InfrastructureException,
    OperationTimeoutException,
    RedSessionException,
    SerializationException,
    StoreException,
)


class TestRedSessionException:
    def test_basic_creation(self):
        exc = RedSessionException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_context(self):
        exc = RedSessionException("failed", code="X", context={"operation": "set"})
        assert exc.code == "X"
        assert exc.context["operation"] == "set"

    def test_context_defaults_to_empty_dict(self):
        exc = RedSessionException("test")
        exc.context["key"] = "value"
        assert RedSessionException("test2").context == {}


class TestExceptionCodes:
    @pytest.mark.parametrize(
        ("exc_type", "code"),
        [
            (StoreException, "STORE_ERROR"),
            (OperationTimeoutException, "STORE_TIMEOUT"),
            (EntropyException, "ENTROPY_ERROR"),
            (SerializationException, "SERIALIZATION_ERROR"),
        ],
    )
    def test_default_codes(self, exc_type, code):
        assert exc_type("boom").code == code

    def test_code_can_be_overridden(self):
        assert StoreException("boom", code="CUSTOM").code == "CUSTOM"


class TestExceptionHierarchy:
    def test_store_is_infrastructure(self):
        assert issubclass(StoreException, InfrastructureException)

    def test_timeout_is_store_error(self):
        assert issubclass(OperationTimeoutException, StoreException)

    def test_entropy_is_infrastructure(self):
        assert issubclass(EntropyException, InfrastructureException)
        assert not issubclass(EntropyException, StoreException)

    def test_serialization_is_not_infrastructure(self):
        assert issubclass(SerializationException, RedSessionException)
        assert not issubclass(SerializationException, InfrastructureException)

    def test_catch_all_redsession_exceptions(self):
        exceptions = [
            StoreException("down"),
            OperationTimeoutException("slow"),
            EntropyException("no randomness"),
            SerializationException("bad payload"),
        ]
        for exc in exceptions:
            with pytest.raises(RedSessionException) as exc_info:
                raise exc
            assert exc_info.value is exc
