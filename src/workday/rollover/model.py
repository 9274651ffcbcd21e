from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RolloverResult:
    from_date: date
    to_date: date
    moved: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.moved)
