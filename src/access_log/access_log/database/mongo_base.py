from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..core.exceptions import DuplicateBadge, StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into StoreUnavailable.

    A duplicate key can only come from the unique badge index, so it is
    reported as DuplicateBadge.
    """
    try:
        yield
    except DuplicateKeyError as e:
        raise DuplicateBadge("User with this ID number already exists.") from e
    except PyMongoError as e:
        logger.error("MongoDB %s failed: %s", operation, e)
        raise StoreUnavailable(f"{operation} failed: {e}") from e


def object_id_or_none(value: Any) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(str(value)):
        return None
    return ObjectId(str(value))


def exact_ci(value: str) -> dict:
    """Case-insensitive exact-match condition."""
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}
