from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Directory view of a user: only what the engine needs for team reports."""

    user_id: str
    full_name: str
    team: Optional[str] = None
    is_active: bool = True
