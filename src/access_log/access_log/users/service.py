from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_role
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import DuplicateBadge, InvalidInput, NotFound
from ..store.repository import RecordStore
from .model import User

logger = logging.getLogger(__name__)


class UserService:
    """Use case: provision and maintain badge holders."""

    def __init__(self, store: RecordStore):
        self._store = store

    def list_users(self) -> Sequence[User]:
        return self._store.list_users()

    def get_user(self, user_id: str) -> User:
        user = self._store.get_user_by_id(user_id)
        if not user:
            raise NotFound("User not found.")
        return user

    def get_by_badge(self, badge_id: str) -> User:
        user = self._store.get_user_by_badge(badge_id)
        if not user:
            raise NotFound("User not found.")
        return user

    def create_user(self, *, name: Any, id_number: Any, role: Any) -> User:
        if not name or not id_number or not role:
            raise InvalidInput("Name, idNumber, and role are required.")
        name = require_non_empty(name, "name")
        id_number = require_non_empty(id_number, "idNumber")
        role = require_role(role)

        if self._store.get_user_by_badge(id_number):
            raise DuplicateBadge("User with this ID number already exists.")

        user = self._store.create_user(name=name, id_number=id_number, role=role)
        logger.info("Provisioned user %s (%s, %s)", user.user_id, user.id_number, user.role.value)
        return user

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[Any] = None,
        role: Optional[Any] = None,
        password: Optional[str] = None,
    ) -> User:
        new_name = require_non_empty(name, "name") if name is not None else None
        new_role = require_role(role) if role is not None else None
        password_hash = None
        if password is not None:
            require_min_length(str(password), "password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(str(password))

        user = self._store.update_user(user_id, name=new_name, role=new_role, password_hash=password_hash)
        if not user:
            raise NotFound("User not found.")
        return user

    def delete_user(self, user_id: str) -> User:
        user = self._store.delete_user(user_id)
        if not user:
            raise NotFound("User not found.")
        logger.info("Deleted user %s (%s)", user.user_id, user.id_number)
        return user
