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
"""redsession session — identifier minting, atomic primitives and the store facade.

Import concrete backends from the adapter package::

    from redsession.session.adapters.memory import InMemoryAtomicStore
    from redsession.session.adapters.redis import RedisAtomicStore
"""

from redsession.session.auto_configuration import create_session_store
from redsession.session.identifier import IdentifierGenerator
from redsession.session.ports.outbound import COUNTER_CEILING, AtomicStore
from redsession.session.store import SessionStore

__all__ = [
    "COUNTER_CEILING",
    "AtomicStore",
    "IdentifierGenerator",
    "SessionStore",
    "create_session_store",
]
