import hashlib
import logging
import os
from pathlib import Path
from typing import Optional

import ffmpeg

logger = logging.getLogger(__name__)

THUMBNAIL_WIDTH = 480
MAX_SEEK_SECONDS = 10.0
FALLBACK_SEEK_SECONDS = 1.0


class ThumbnailError(Exception):
    pass


def thumbnail_key(video_id: str) -> str:
    return hashlib.sha1(video_id.encode("utf-8")).hexdigest()[:16]


class ThumbnailGenerator:
    def __init__(self, cache_dir: str, ffmpeg_path: str = "ffmpeg", ffprobe_path: str = "ffprobe"):
        self.cache_dir = Path(cache_dir)
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path

    def cache_path(self, video_id: str) -> Path:
        return self.cache_dir / f"{thumbnail_key(video_id)}.jpg"

    def probe_duration(self, input_path: str) -> Optional[float]:
        try:
            probe = ffmpeg.probe(input_path, cmd=self.ffprobe_path)
            return float(probe["format"]["duration"])
        except ffmpeg.Error as e:
            logger.warning("ffprobe failed for %s: %s", input_path, (e.stderr or b"").decode("utf8", "replace").strip())
        except (OSError, KeyError, ValueError, TypeError) as e:
            logger.warning("Could not read duration of %s: %s", input_path, e)
        return None

    def seek_time(self, input_path: str) -> float:
        duration = self.probe_duration(input_path)
        if not duration or duration <= 0:
            return FALLBACK_SEEK_SECONDS
        return min(duration * 0.1, MAX_SEEK_SECONDS)

    def get(self, video_id: str, input_path: str) -> Path:
        """
        Path to a JPEG frame of ``input_path``, extracting it with ffmpeg on
        the first request. Raises ThumbnailError when ffmpeg fails or is missing.
        """
        out = self.cache_path(video_id)
        if out.exists() and out.stat().st_size > 0:
            return out

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        tmp = out.with_name(out.stem + ".tmp.jpg")
        ts = self.seek_time(input_path)

        try:
            (
                ffmpeg
                .input(input_path, ss=ts)
                .filter("scale", THUMBNAIL_WIDTH, -2)
                .output(str(tmp), vframes=1, format="image2", vcodec="mjpeg")
                .overwrite_output()
                .run(cmd=self.ffmpeg_path, quiet=True)
            )
        except ffmpeg.Error as e:
            stderr = (e.stderr or b"").decode("utf8", "replace").strip()
            raise ThumbnailError(f"ffmpeg failed for {input_path}: {stderr}") from e
        except OSError as e:
            raise ThumbnailError(f"could not run {self.ffmpeg_path}: {e}") from e

        if not tmp.exists() or tmp.stat().st_size == 0:
            raise ThumbnailError(f"ffmpeg produced no frame for {input_path}")

        os.replace(tmp, out)
        logger.info("Generated thumbnail for %s at %.2fs", input_path, ts)
        return out
