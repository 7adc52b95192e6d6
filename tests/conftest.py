from __future__ import annotations

from datetime import datetime

import pytest

from src.access_log.access_log.core.enums import Role
from src.access_log.access_log.store.memory_store import MemoryRecordStore
from src.access_log.access_log.users.model import User


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, 0)


@pytest.fixture
def alice(fixed_now) -> User:
    return User(
        user_id="u1",
        name="Alice Johnson",
        id_number="A1001",
        role=Role.USER,
        date_created=datetime(2026, 1, 20, 9, 0, 0),
    )


@pytest.fixture
def memory_store(alice, fixed_now) -> MemoryRecordStore:
    return MemoryRecordStore([alice], clock=lambda: fixed_now)
