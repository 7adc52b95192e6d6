from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a provisioned badge holder.

    Note: plain data object, no storage access. ``password_hash`` is only set
    for users who sign in interactively and is never serialized.
    """

    user_id: str
    name: str
    id_number: str
    role: Role
    date_created: datetime
    password_hash: Optional[str] = None

    def public_fields(self) -> dict:
        return {"name": self.name, "idNumber": self.id_number}

    def to_dict(self) -> dict:
        return {
            "_id": self.user_id,
            "name": self.name,
            "idNumber": self.id_number,
            "role": self.role.value,
            "dateCreated": to_iso(self.date_created),
        }
