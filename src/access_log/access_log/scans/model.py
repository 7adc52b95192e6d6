from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ScanResult
from ..logs.model import AttendanceLog
from ..users.model import User


@dataclass(frozen=True)
class ScanOutcome:
    """What happened to one scan. UNKNOWN_USER and DUPLICATE_IGNORED are
    regular outcomes, not failures."""

    result: ScanResult
    user: Optional[User] = None
    log: Optional[AttendanceLog] = None

    @property
    def user_found(self) -> bool:
        return self.user is not None

    @property
    def message(self) -> str:
        if self.user is None:
            return "No user found."
        if self.result == ScanResult.DUPLICATE_IGNORED:
            return "Ignored duplicate tap (cooldown)"
        if self.result == ScanResult.SESSION_CLOSED:
            return f"Time out recorded for {self.user.name}."
        return f"Time in recorded for {self.user.name}."

    def to_dict(self) -> dict:
        if self.user is None:
            return {"userFound": False, "user": None, "message": self.message}
        return {
            "userFound": True,
            "user": self.user.public_fields(),
            "action": self.result.value,
            "log": self.log.to_dict() if self.log else None,
            "message": self.message,
        }
