from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class UnknownEvent:
    type: str
    data: dict[str, Any] = field(default_factory=dict)
