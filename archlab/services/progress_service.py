from __future__ import annotations

from typing import Dict

from archlab.db.models import LevelProgress
from archlab.db.repository import ProgressRepository


def apply_evaluation(progress: LevelProgress, evaluation: Dict[str, object]) -> None:
    """Fold one level evaluation into ``progress`` in place.

    Points are only awarded the first time a level is completed or an
    achievement is unlocked.
    """
    completed = list(progress.completed_levels or [])
    achievements = list(progress.unlocked_achievements or [])
    level_id = int(evaluation.get("levelId", 0))
    bonuses = evaluation.get("achievementPoints", {}) or {}
    points = 0

    for achievement in evaluation.get("unlockedAchievements", []) or []:
        if achievement not in achievements:
            achievements.append(achievement)
            points += int(bonuses.get(achievement, 0))

    if evaluation.get("complete") and level_id not in completed:
        completed.append(level_id)
        points += int(evaluation.get("levelPoints", 0))

    progress.completed_levels = sorted(completed)
    progress.unlocked_achievements = achievements
    progress.total_points = (progress.total_points or 0) + points
    progress.current_level = max(progress.current_level or 1, max(completed, default=0) + 1)


class ProgressService:
    def __init__(self) -> None:
        self._repo = ProgressRepository()

    def get_progress(self, player_id: str) -> LevelProgress:
        return self._repo.find(player_id) or LevelProgress.start(player_id)

    def record_result(self, player_id: str, evaluation: Dict[str, object]) -> LevelProgress:
        return self._repo.update(player_id, lambda progress: apply_evaluation(progress, evaluation))

    def reset(self, player_id: str) -> bool:
        return self._repo.remove(player_id)

    @staticmethod
    def serialize(progress: LevelProgress) -> Dict[str, object]:
        return {
            "playerId": progress.player_id,
            "currentLevel": progress.current_level,
            "totalPoints": progress.total_points,
            "completedLevels": list(progress.completed_levels or []),
            "unlockedAchievements": list(progress.unlocked_achievements or []),
            "updatedAt": progress.updated_at.isoformat() if progress.updated_at else None,
        }
