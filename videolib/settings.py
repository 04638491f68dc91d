import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# -----------------------------
# CONFIG
# -----------------------------
VIDEO_EXTS = {".mp4", ".mkv", ".avi", ".mov", ".webm", ".flv", ".wmv", ".m4v"}
SUBTITLE_EXTS = [".srt", ".vtt", ".ass", ".ssa"]
DEFAULT_SUBTITLE_LANGUAGE = "en"

# HOST = "0.0.0.0" to allow access from other devices on the network
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))


def env_path(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name) or default
    return str(Path(value).expanduser()) if value else None


DATA_DIR = Path(env_path("VIDEOLIB_DATA_DIR", "~/.videolib"))
# falls back to <DATA_DIR>/thumbnails when unset
THUMBNAIL_DIR = env_path("VIDEOLIB_THUMBNAIL_DIR")

FFMPEG_PATH = os.getenv("FFMPEG_PATH", "ffmpeg")
FFPROBE_PATH = os.getenv("FFPROBE_PATH", "ffprobe")

LOG_LEVEL = os.getenv("VIDEOLIB_LOG_LEVEL", "INFO").upper()


def default_config() -> dict:
    """Values copied into ``app.config`` at start-up."""
    return {
        "DATA_DIR": str(DATA_DIR),
        "THUMBNAIL_DIR": THUMBNAIL_DIR,
        "FFMPEG_PATH": FFMPEG_PATH,
        "FFPROBE_PATH": FFPROBE_PATH,
    }
