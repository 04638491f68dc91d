import json
import shutil
import tempfile
import unittest
from datetime import datetime, timedelta, timezone

from videolib.progress import COMPLETION_POINTS, ProgressTracker


class Clock:
    def __init__(self):
        self.current = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, days: int):
        self.current += timedelta(days=days)


class TestProgressTracker(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.clock = Clock()
        self.tracker = ProgressTracker(self.test_dir, now=self.clock)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_partial_progress_is_recorded(self):
        result = self.tracker.update("vid", percentage=42.5)
        self.assertEqual(result["progress"]["percentage"], 42.5)
        self.assertTrue(result["progress"]["watched"])
        self.assertFalse(result["progress"]["completed"])
        self.assertEqual(result["stats"]["videosStarted"], 1)
        self.assertEqual(result["stats"]["totalPoints"], 0)

    def test_first_completion_awards_points_and_achievement(self):
        result = self.tracker.update("vid", completed=True)

        self.assertTrue(result["progress"]["completed"])
        self.assertEqual(result["progress"]["percentage"], 100.0)
        self.assertEqual([a["id"] for a in result["unlocked"]], ["first_video"])
        self.assertEqual(result["stats"]["videosCompleted"], 1)
        self.assertEqual(result["stats"]["totalPoints"], COMPLETION_POINTS + 25)
        self.assertEqual(result["stats"]["currentStreak"], 1)

    def test_completing_twice_does_not_double_award(self):
        first = self.tracker.update("vid", completed=True)
        second = self.tracker.update("vid", completed=True)

        self.assertEqual(second["unlocked"], [])
        self.assertEqual(second["stats"]["totalPoints"], first["stats"]["totalPoints"])
        self.assertEqual(second["stats"]["videosCompleted"], 1)
        self.assertEqual(second["stats"]["videosStarted"], 1)

        # a fresh tracker over the same files agrees
        stats = ProgressTracker(self.test_dir, now=self.clock).get_stats()
        self.assertEqual(stats["totalPoints"], first["stats"]["totalPoints"])

    def test_high_percentage_completes(self):
        result = self.tracker.update("vid", percentage=95)
        self.assertTrue(result["progress"]["completed"])

        # scrubbing back does not un-complete
        result = self.tracker.update("vid", percentage=5)
        self.assertTrue(result["progress"]["completed"])
        self.assertEqual(result["progress"]["percentage"], 5.0)
        self.assertEqual(result["stats"]["videosCompleted"], 1)

    def test_percentage_is_clamped_and_validated(self):
        self.assertEqual(self.tracker.update("a", percentage=-10)["progress"]["percentage"], 0.0)
        with self.assertRaises(ValueError):
            self.tracker.update("a", percentage="lots")
        with self.assertRaises(ValueError):
            self.tracker.update("a", percentage=True)

    def test_streak_same_day_consecutive_and_reset(self):
        self.assertEqual(self.tracker.update("v1", completed=True)["stats"]["currentStreak"], 1)
        self.assertEqual(self.tracker.update("v2", completed=True)["stats"]["currentStreak"], 1)

        self.clock.advance(1)
        self.assertEqual(self.tracker.update("v3", completed=True)["stats"]["currentStreak"], 2)

        self.clock.advance(1)
        result = self.tracker.update("v4", completed=True)
        self.assertEqual(result["stats"]["currentStreak"], 3)
        self.assertIn("streak_3", [a["id"] for a in result["unlocked"]])

        self.clock.advance(2)
        stats = self.tracker.update("v5", completed=True)["stats"]
        self.assertEqual(stats["currentStreak"], 1)
        self.assertEqual(stats["longestStreak"], 3)

    def test_level_follows_points(self):
        for i in range(5):
            stats = self.tracker.update(f"v{i}", completed=True)["stats"]
        # 5 completions + first_video + five_videos bonuses
        self.assertEqual(stats["totalPoints"], 5 * COMPLETION_POINTS + 25 + 50)
        self.assertEqual(stats["level"], 2)

    def test_explorer_unlocks_on_starts(self):
        for i in range(9):
            self.assertEqual(self.tracker.update(f"v{i}", percentage=1)["unlocked"], [])
        result = self.tracker.update("v9", percentage=1)
        self.assertEqual([a["id"] for a in result["unlocked"]], ["explorer"])

    def test_list_achievements(self):
        self.tracker.update("vid", completed=True)
        achievements = {a["id"]: a for a in self.tracker.list_achievements()}

        self.assertTrue(achievements["first_video"]["unlocked"])
        self.assertIsNotNone(achievements["first_video"]["unlockedAt"])
        self.assertFalse(achievements["ten_videos"]["unlocked"])
        self.assertEqual(achievements["ten_videos"]["current"], 1)

    def test_corrupt_state_files_are_treated_as_empty(self):
        with open(self.tracker.progress_path, "w") as f:
            f.write("[oops")
        with open(self.tracker.stats_path, "w") as f:
            json.dump(["not", "a", "dict"], f)

        self.assertEqual(self.tracker.all_progress(), {})
        self.assertEqual(self.tracker.get_stats()["totalPoints"], 0)
        self.assertEqual(self.tracker.update("vid", percentage=10)["stats"]["videosStarted"], 1)


if __name__ == '__main__':
    unittest.main()
