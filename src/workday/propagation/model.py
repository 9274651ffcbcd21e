from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PropagationResult:
    task_id: str
    updated: tuple[date, ...] = ()
    created: tuple[date, ...] = ()
