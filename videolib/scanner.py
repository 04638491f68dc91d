import base64
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from .settings import DEFAULT_SUBTITLE_LANGUAGE, SUBTITLE_EXTS, VIDEO_EXTS

logger = logging.getLogger(__name__)

LANG_TAG_RE = re.compile(r"[A-Za-z]{2,3}(-[A-Za-z0-9]{2,4})?")


def encode_id(path: str) -> str:
    return base64.urlsafe_b64encode(path.encode("utf-8")).decode("ascii").rstrip("=")


def decode_id(video_id: str) -> str:
    """Inverse of encode_id. Raises ValueError for anything encode_id could not have produced."""
    padded = video_id + "=" * (-len(video_id) % 4)
    try:
        path = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (UnicodeError, ValueError) as e:
        raise ValueError(f"invalid video id: {video_id!r}") from e
    if not path or encode_id(path) != video_id:
        raise ValueError(f"invalid video id: {video_id!r}")
    return path


def safe_norm(path: str) -> str:
    # normalize slashes and strip odd chars
    path = path.replace("\\", "/")
    path = re.sub(r"/+", "/", path)
    path = path.lstrip("/")
    return path


def is_within_root(root: Path, target: Path) -> bool:
    try:
        root_res = root.resolve()
        target_res = target.resolve()
    except (OSError, RuntimeError):
        return False
    return target_res == root_res or root_res in target_res.parents


def owning_folder(path: str, folders: Iterable[str]) -> Optional[str]:
    for folder in folders:
        if is_within_root(Path(folder), Path(path)):
            return folder
    return None


def name_key(name: str):
    # case-insensitive, ties broken by the raw name
    return name.lower(), name


def is_video_file(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in VIDEO_EXTS


def iso_mtime(mtime: float) -> str:
    return datetime.fromtimestamp(mtime, tz=timezone.utc).isoformat().replace("+00:00", "Z")


def subtitle_language(stem: str, name: str) -> Optional[str]:
    """Language tag for a subtitle file named after ``stem``, or None if it belongs elsewhere.

    ``movie.srt`` gets the default language, ``movie.fr.srt`` / ``movie.pt-BR.vtt`` get
    the tag from the name.
    """
    base, ext = os.path.splitext(name)
    if ext.lower() not in SUBTITLE_EXTS:
        return None
    if base == stem:
        return DEFAULT_SUBTITLE_LANGUAGE
    if base.startswith(stem + "."):
        tag = base[len(stem) + 1:]
        if LANG_TAG_RE.fullmatch(tag):
            return tag.lower()
    return None


def find_subtitles(directory: str, stem: str, names: Optional[List[str]] = None) -> List[dict]:
    if names is None:
        try:
            names = os.listdir(directory)
        except OSError as e:
            logger.warning("Cannot list %s for subtitles: %s", directory, e)
            return []

    subtitles = []
    for name in sorted(names):
        language = subtitle_language(stem, name)
        if language is None:
            continue
        subtitles.append({
            "filename": name,
            "path": os.path.join(directory, name),
            "language": language,
        })
    return subtitles


def build_video(path: str, source_folder: Optional[str], names: Optional[List[str]] = None) -> dict:
    """Video record for ``path``. Raises OSError when the file cannot be stat'ed."""
    stat = os.stat(path)
    directory, filename = os.path.split(path)
    stem, ext = os.path.splitext(filename)

    video = {
        "id": encode_id(path),
        "title": stem,
        "filename": filename,
        "path": path,
        "size": stat.st_size,
        "format": ext[1:].lower(),
        "modified": iso_mtime(stat.st_mtime),
        "subtitles": find_subtitles(directory, stem, names),
    }
    if source_folder is not None:
        rel = safe_norm(os.path.relpath(path, source_folder))
        folder = os.path.dirname(rel)
        video["relativePath"] = rel
        video["folder"] = folder or None
        video["sourceFolder"] = source_folder
    return video


def scan_directory(root: str, source_folder: Optional[str] = None) -> List[dict]:
    """Depth-first walk of ``root``; unreadable entries are logged and skipped."""
    source_folder = source_folder or root
    videos = []

    def on_error(err: OSError):
        logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror or err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        for name in filenames:
            if not is_video_file(name):
                continue
            file_path = os.path.join(dirpath, name)
            try:
                if not os.path.isfile(file_path):
                    continue
                videos.append(build_video(file_path, source_folder, filenames))
            except OSError as e:
                logger.warning("Skipping %s: %s", file_path, e)

    videos.sort(key=lambda v: name_key(v["relativePath"]))
    return videos


def scan_folders(folders: Iterable[str]) -> List[dict]:
    videos = []
    for folder in folders:
        if not os.path.isdir(folder):
            logger.warning("Folder does not exist: %s", folder)
            continue
        try:
            videos.extend(scan_directory(folder))
        except Exception:
            logger.exception("Error scanning folder %s", folder)
    return videos


def get_video(videos: List[dict], video_id: str) -> Optional[dict]:
    for v in videos:
        if v["id"] == video_id:
            return v
    return None


def score_match(q: str, title: str, relpath: str) -> int:
    """
    Simple scoring:
    - direct substring in title gets highest
    - substring in relative path next
    - token matches
    """
    q = q.lower().strip()
    if not q:
        return 0
    t = title.lower()
    r = relpath.lower()

    if q == t:
        return 1000
    if q in t:
        return max(1, 800 - (len(t) - len(q)))
    if q in r:
        return max(1, 500 - (len(r) - len(q)))

    tokens = re.split(r"[\s_\-\.]+", q)
    score = 0
    for tok in tokens:
        if not tok:
            continue
        if tok in t:
            score += 120
        elif tok in r:
            score += 60
    return score


def search_videos(videos: List[dict], q: str = "", folder: str = "") -> List[dict]:
    q = (q or "").strip()
    folder = (folder or "").strip()
    items = videos

    if folder:
        if os.path.isabs(folder):
            root = Path(folder)
            items = [v for v in items if is_within_root(root, Path(v["path"]).parent)]
        else:
            folder = safe_norm(folder).rstrip("/")
            items = [
                v for v in items
                if v.get("folder") and (v["folder"] == folder or v["folder"].startswith(folder + "/"))
            ]

    if not q:
        return items

    scored = []
    for v in items:
        s = score_match(q, v["title"], v.get("relativePath") or v["filename"])
        if s > 0:
            scored.append((s, v))
    scored.sort(key=lambda x: x[0], reverse=True)
    return [v for _, v in scored]


def next_videos(videos: List[dict], video_id: str, limit: int = 5) -> List[dict]:
    """Videos after ``video_id`` in the same folder, in scan order."""
    for i, v in enumerate(videos):
        if v["id"] == video_id:
            break
    else:
        return []

    current = videos[i]
    following = [
        other for other in videos[i + 1:]
        if other.get("sourceFolder") == current.get("sourceFolder")
        and other.get("folder") == current.get("folder")
    ]
    return following[:limit]


def list_roots(folders: Iterable[str]) -> List[dict]:
    roots = []
    for folder in folders:
        try:
            stat = os.stat(folder)
        except OSError:
            continue
        if not os.path.isdir(folder):
            continue
        roots.append({
            "name": os.path.basename(folder.rstrip(os.sep)) or folder,
            "path": folder,
            "modified": iso_mtime(stat.st_mtime),
        })
    return roots


def browse(requested_path: Optional[str], folders: List[str]) -> dict:
    """One level of a configured folder tree.

    Raises PermissionError for paths outside the configured folders and
    FileNotFoundError for missing ones.
    """
    if not requested_path:
        return {"folders": list_roots(folders), "videos": [], "currentPath": None, "parentPath": None}

    source_folder = owning_folder(requested_path, folders)
    if source_folder is None:
        raise PermissionError(requested_path)
    if not os.path.isdir(requested_path):
        raise FileNotFoundError(requested_path)

    names = sorted(os.listdir(requested_path), key=name_key)
    subfolders = []
    videos = []
    for name in names:
        item_path = os.path.join(requested_path, name)
        try:
            if os.path.isdir(item_path):
                subfolders.append({
                    "name": name,
                    "path": item_path,
                    "modified": iso_mtime(os.stat(item_path).st_mtime),
                })
            elif is_video_file(name):
                videos.append(build_video(item_path, source_folder, names))
        except OSError as e:
            logger.warning("Skipping %s: %s", item_path, e)

    at_root = is_within_root(Path(requested_path), Path(source_folder))
    return {
        "folders": subfolders,
        "videos": videos,
        "currentPath": requested_path,
        "parentPath": None if at_root else os.path.dirname(requested_path.rstrip(os.sep)),
    }
