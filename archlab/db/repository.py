from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import delete

from archlab.db.models import LevelProgress
from archlab.db.session import session_scope


class ProgressRepository:
    def find(self, player_id: str) -> Optional[LevelProgress]:
        with session_scope() as session:
            return session.get(LevelProgress, player_id)

    def update(self, player_id: str, apply: Callable[[LevelProgress], None]) -> LevelProgress:
        """Load the player's row (creating it on first use), apply ``apply`` and commit.

        Reading and writing happen in one transaction, so two submissions for
        the same player cannot both award first-time points.
        """
        with session_scope() as session:
            progress = session.get(LevelProgress, player_id, with_for_update=True)
            if progress is None:
                progress = LevelProgress.start(player_id)
                session.add(progress)
            apply(progress)
            session.flush()
            session.refresh(progress)
            return progress

    def remove(self, player_id: str) -> bool:
        with session_scope() as session:
            result = session.execute(delete(LevelProgress).where(LevelProgress.player_id == player_id))
            return result.rowcount > 0
