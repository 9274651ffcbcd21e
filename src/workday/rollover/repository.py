from __future__ import annotations

from datetime import date
from typing import Optional, Protocol


class RolloverTrackingRepository(Protocol):
    """Per-user marker of the last day a catch-up rollover reached."""

    def get_last_rollover(self, user_id: str) -> Optional[date]:
        raise NotImplementedError

    def set_last_rollover(self, user_id: str, last_date: date) -> None:
        raise NotImplementedError
