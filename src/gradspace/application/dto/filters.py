from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class UserFilterDTO:
    search: str = ""
    batch: str = ""
    department: str = ""
    role: str = ""

    def as_params(self) -> dict[str, Any]:
        return {
            "search": self.search,
            "batch": self.batch,
            "department": self.department,
            "role": self.role,
        }
