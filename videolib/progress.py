import json
import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

PROGRESS_FILE = "progress.json"
STATS_FILE = "stats.json"
ACHIEVEMENTS_FILE = "achievements.json"

COMPLETION_PERCENTAGE = 90
COMPLETION_POINTS = 10
POINTS_PER_LEVEL = 100

ACHIEVEMENTS = [
    {"id": "first_video", "name": "First Steps", "description": "Finish your first video",
     "stat": "videosCompleted", "threshold": 1, "points": 25},
    {"id": "five_videos", "name": "Warming Up", "description": "Finish 5 videos",
     "stat": "videosCompleted", "threshold": 5, "points": 50},
    {"id": "ten_videos", "name": "Dedicated Learner", "description": "Finish 10 videos",
     "stat": "videosCompleted", "threshold": 10, "points": 100},
    {"id": "twenty_five_videos", "name": "Binge Scholar", "description": "Finish 25 videos",
     "stat": "videosCompleted", "threshold": 25, "points": 250},
    {"id": "fifty_videos", "name": "Library Master", "description": "Finish 50 videos",
     "stat": "videosCompleted", "threshold": 50, "points": 500},
    {"id": "explorer", "name": "Explorer", "description": "Start 10 different videos",
     "stat": "videosStarted", "threshold": 10, "points": 30},
    {"id": "streak_3", "name": "On a Roll", "description": "Finish videos 3 days in a row",
     "stat": "currentStreak", "threshold": 3, "points": 50},
    {"id": "streak_7", "name": "Week Warrior", "description": "Finish videos 7 days in a row",
     "stat": "currentStreak", "threshold": 7, "points": 150},
    {"id": "streak_30", "name": "Unstoppable", "description": "Finish videos 30 days in a row",
     "stat": "currentStreak", "threshold": 30, "points": 1000},
]

DEFAULT_STATS = {
    "totalPoints": 0,
    "level": 1,
    "videosStarted": 0,
    "videosCompleted": 0,
    "currentStreak": 0,
    "longestStreak": 0,
    "lastCompletedDate": None,
}


def level_for(points: int) -> int:
    return points // POINTS_PER_LEVEL + 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _read_json(path: Path, default):
    if not path.exists():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable state file %s: %s", path, e)
        return default
    return data if isinstance(data, type(default)) else default


def _write_json(path: Path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


class ProgressTracker:
    """
    Per-video watch progress plus the points / streak / achievement bookkeeping
    that rides on top of it. Each call reads and rewrites the JSON files in
    ``data_dir``; there is no locking.
    """

    def __init__(self, data_dir: str, now: Callable[[], datetime] = _utcnow):
        self.data_dir = Path(data_dir)
        self.now = now

    @property
    def progress_path(self) -> Path:
        return self.data_dir / PROGRESS_FILE

    @property
    def stats_path(self) -> Path:
        return self.data_dir / STATS_FILE

    @property
    def achievements_path(self) -> Path:
        return self.data_dir / ACHIEVEMENTS_FILE

    def all_progress(self) -> Dict[str, Dict]:
        return _read_json(self.progress_path, {})

    def get_progress(self, video_id: str) -> Optional[Dict]:
        return self.all_progress().get(video_id)

    def get_stats(self) -> Dict:
        stats = dict(DEFAULT_STATS)
        stats.update(_read_json(self.stats_path, {}))
        return stats

    def unlocked(self) -> Dict[str, str]:
        data = _read_json(self.achievements_path, {})
        unlocked = data.get("unlocked")
        return unlocked if isinstance(unlocked, dict) else {}

    def list_achievements(self) -> List[Dict]:
        stats = self.get_stats()
        unlocked = self.unlocked()
        result = []
        for a in ACHIEVEMENTS:
            entry = dict(a)
            entry["current"] = stats.get(a["stat"], 0)
            entry["unlocked"] = a["id"] in unlocked
            entry["unlockedAt"] = unlocked.get(a["id"])
            result.append(entry)
        return result

    def update(self, video_id: str, percentage=None, completed: bool = False) -> Dict:
        """
        Record a playback update. Only the first not-completed -> completed
        transition of a video awards points, moves the streak and can unlock
        achievements; repeating it is a no-op for the counters.
        """
        if percentage is not None:
            if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
                raise ValueError("percentage must be a number")
            percentage = max(0.0, min(100.0, float(percentage)))

        now = self.now()
        records = self.all_progress()
        stats = self.get_stats()
        unlocked = self.unlocked()

        record = records.get(video_id)
        if record is None:
            record = {
                "watched": False,
                "completed": False,
                "percentage": 0.0,
                "lastWatched": None,
                "completedAt": None,
            }
            stats["videosStarted"] += 1

        if percentage is not None:
            record["percentage"] = percentage
        record["watched"] = True
        record["lastWatched"] = now.isoformat()

        finished = completed or record["percentage"] >= COMPLETION_PERCENTAGE
        if finished and not record["completed"]:
            record["completed"] = True
            record["completedAt"] = now.isoformat()
            if completed and percentage is None:
                record["percentage"] = 100.0
            self._award_completion(stats, now.date())

        newly = self._check_achievements(stats, unlocked, now)
        stats["level"] = level_for(stats["totalPoints"])

        records[video_id] = record
        _write_json(self.progress_path, records)
        _write_json(self.stats_path, stats)
        _write_json(self.achievements_path, {"unlocked": unlocked})

        return {"progress": record, "stats": stats, "unlocked": newly}

    def _award_completion(self, stats: Dict, today: date):
        stats["videosCompleted"] += 1
        stats["totalPoints"] += COMPLETION_POINTS

        last = stats.get("lastCompletedDate")
        last_day = date.fromisoformat(last) if last else None
        if last_day == today:
            pass
        elif last_day == today - timedelta(days=1):
            stats["currentStreak"] += 1
        else:
            stats["currentStreak"] = 1
        stats["longestStreak"] = max(stats["longestStreak"], stats["currentStreak"])
        stats["lastCompletedDate"] = today.isoformat()

    def _check_achievements(self, stats: Dict, unlocked: Dict[str, str], now: datetime) -> List[Dict]:
        newly = []
        for a in ACHIEVEMENTS:
            if a["id"] in unlocked:
                continue
            if stats.get(a["stat"], 0) >= a["threshold"]:
                unlocked[a["id"]] = now.isoformat()
                stats["totalPoints"] += a["points"]
                newly.append(a)
                logger.info("Achievement unlocked: %s (+%d)", a["name"], a["points"])
        return newly
