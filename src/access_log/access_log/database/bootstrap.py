from __future__ import annotations

import logging
from typing import Iterable

from pymongo import ASCENDING, DESCENDING
from pymongo.collation import Collation
from pymongo.database import Database

from ..core.constants import LOGS_COLLECTION, USERS_COLLECTION
from ..store.repository import RecordStore
from ..users.model import User
from .mongo_base import store_errors

logger = logging.getLogger(__name__)


def ensure_indexes(db: Database) -> None:
    """Create indexes (idempotent).

    Badge uniqueness is enforced case-insensitively through a strength-2
    collation on ``users.idNumber``.
    """
    with store_errors("create indexes"):
        db[USERS_COLLECTION].create_index(
            [("idNumber", ASCENDING)],
            name="idNumber_unique_ci",
            unique=True,
            collation=Collation(locale="en", strength=2),
        )
        db[USERS_COLLECTION].create_index([("dateCreated", DESCENDING)], name="dateCreated_desc")
        db[LOGS_COLLECTION].create_index(
            [("userIdNumber", ASCENDING), ("rfidScannerId", ASCENDING), ("timeOut", ASCENDING)],
            name="open_session_lookup",
        )
        db[LOGS_COLLECTION].create_index([("timeIn", DESCENDING)], name="timeIn_desc")
    logger.info("Indexes ready on %s", db.name)


def list_collections(db: Database) -> list[str]:
    with store_errors("list collections"):
        return sorted(db.list_collection_names())


def seed_users(store: RecordStore, users: Iterable[User]) -> list[User]:
    """Insert users whose badge is not provisioned yet; returns the inserted ones."""
    inserted: list[User] = []
    for user in users:
        if store.get_user_by_badge(user.id_number):
            continue
        inserted.append(store.create_user(name=user.name, id_number=user.id_number, role=user.role))
    return inserted
