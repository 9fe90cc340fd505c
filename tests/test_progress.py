from archlab.db.models import LevelProgress
from archlab.services.progress_service import apply_evaluation


def _evaluation(level_id, complete=True, achievements=()):
    return {
        "levelId": level_id,
        "complete": complete,
        "levelPoints": level_id * 100,
        "unlockedAchievements": list(achievements),
        "achievementPoints": {achievement: 50 for achievement in achievements},
    }


def test_first_completion_awards_level_and_achievement_points():
    progress = LevelProgress.start("p1")
    apply_evaluation(progress, _evaluation(1, achievements=["l1-efficient"]))

    assert progress.total_points == 150
    assert progress.completed_levels == [1]
    assert progress.current_level == 2
    assert progress.unlocked_achievements == ["l1-efficient"]


def test_repeat_submission_awards_nothing_new():
    progress = LevelProgress.start("p1")
    apply_evaluation(progress, _evaluation(1))
    apply_evaluation(progress, _evaluation(1))

    assert progress.total_points == 100
    assert progress.completed_levels == [1]


def test_failed_level_keeps_current_level():
    progress = LevelProgress.start("p1")
    apply_evaluation(progress, _evaluation(3, complete=False, achievements=["l3-fast"]))

    assert progress.total_points == 50
    assert progress.completed_levels == []
    assert progress.current_level == 1


def test_out_of_order_completion_advances_past_highest_level():
    progress = LevelProgress.start("p1")
    apply_evaluation(progress, _evaluation(2))
    apply_evaluation(progress, _evaluation(1))

    assert progress.completed_levels == [1, 2]
    assert progress.current_level == 3
