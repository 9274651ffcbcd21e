from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserDirectory(Protocol):
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self) -> Sequence[User]:
        raise NotImplementedError

    def list_team_members(self, team_id: str) -> Sequence[User]:
        """All members of the team, active or not."""

        raise NotImplementedError
