import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from flask import Flask, Response, abort, jsonify, render_template_string, request, send_file
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import pages, settings
from .embed import bulk_embed_codes, embed_code, embed_url
from .folders import FolderConfig
from .progress import ProgressTracker
from .scanner import (browse, decode_id, find_subtitles, get_video, is_video_file, next_videos, owning_folder,
                      scan_folders, search_videos)
from .streaming import guess_mimetype, stream_file
from .subtitles import srt_to_vtt
from .thumbnails import ThumbnailError, ThumbnailGenerator

logger = logging.getLogger(__name__)

MAX_NEXT_VIDEOS = 20

# -----------------------------
# APP
# -----------------------------
app = Flask(__name__)
app.config.update(settings.default_config())
CORS(app, resources={r"/api/*": {"origins": "*"}})


def folder_config() -> FolderConfig:
    return FolderConfig(app.config["DATA_DIR"])


def tracker() -> ProgressTracker:
    return ProgressTracker(app.config["DATA_DIR"])


def thumbnail_generator() -> ThumbnailGenerator:
    cache_dir = app.config.get("THUMBNAIL_DIR") or os.path.join(app.config["DATA_DIR"], "thumbnails")
    cache_dir = os.path.expanduser(cache_dir)
    return ThumbnailGenerator(cache_dir, app.config["FFMPEG_PATH"], app.config["FFPROBE_PATH"])


def current_videos():
    # full re-scan on every call, nothing is cached
    return scan_folders(folder_config().load())


def find_video_or_404(video_id: str) -> dict:
    video = get_video(current_videos(), video_id)
    if video is None:
        abort(404, description="Video not found")
    return video


def resolve_video_path(video_id: str) -> str:
    """Decode an id back to its file, refusing anything outside the configured folders."""
    try:
        path = decode_id(video_id)
    except ValueError:
        abort(404, description="Video not found")
    if owning_folder(path, folder_config().load()) is None or not is_video_file(path):
        abort(403, description="Access denied to this path")
    if not os.path.isfile(path):
        abort(404, description="Video not found")
    return path


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def int_arg(name: str, default: int, lo: int, hi: int) -> int:
    try:
        value = int(request.args.get(name, str(default)))
    except ValueError:
        abort(400, description=f"bad {name}")
    return max(lo, min(value, hi))


# -----------------------------
# ERRORS
# -----------------------------
@app.errorhandler(HTTPException)
def handle_http_error(e: HTTPException):
    if not request.path.startswith("/api/") or e.code is None or e.code < 400:
        return e
    resp = jsonify({"error": e.description})
    resp.status_code = e.code
    # keep Allow, Content-Range and the like
    for key, value in e.get_response().headers.items():
        if key.lower() not in ("content-type", "content-length"):
            resp.headers[key] = value
    return resp


@app.errorhandler(Exception)
def handle_unexpected_error(e: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500


# -----------------------------
# PAGES
# -----------------------------
@app.route("/")
def home():
    return render_template_string(pages.LIBRARY_HTML, page="library")


@app.route("/watch/<video_id>")
def watch_page(video_id: str):
    return render_template_string(pages.WATCH_HTML, page="watch", video_id=video_id)


@app.route("/embed/<video_id>")
def embed_page(video_id: str):
    return render_template_string(pages.EMBED_HTML, video_id=video_id)


@app.route("/settings")
def settings_page():
    return render_template_string(pages.SETTINGS_HTML, page="settings")


@app.route("/embed-codes")
def embed_codes_page():
    return render_template_string(pages.EMBED_CODES_HTML, page="embed-codes")


@app.route("/stats")
def stats_page():
    return render_template_string(pages.STATS_HTML, page="stats")


# -----------------------------
# API: library
# -----------------------------
@app.route("/api/videos")
def api_videos():
    videos = search_videos(current_videos(), request.args.get("q", ""), request.args.get("folder", ""))
    return jsonify(videos)


@app.route("/api/videos/<video_id>")
def api_video(video_id: str):
    return jsonify(find_video_or_404(video_id))


@app.route("/api/videos/<video_id>/next")
def api_next_videos(video_id: str):
    limit = int_arg("limit", 5, 1, MAX_NEXT_VIDEOS)
    videos = current_videos()
    if get_video(videos, video_id) is None:
        abort(404, description="Video not found")
    return jsonify(next_videos(videos, video_id, limit))


@app.route("/api/videos/<video_id>/embed")
def api_video_embed(video_id: str):
    video = find_video_or_404(video_id)
    base = request.host_url.rstrip("/")
    return jsonify({
        "iframe": embed_code(base, video["id"], video["title"]),
        "embedUrl": embed_url(base, video["id"]),
        "watchUrl": f"{base}/watch/{video['id']}",
    })


@app.route("/api/browse")
def api_browse():
    requested = request.args.get("path") or None
    try:
        return jsonify(browse(requested, folder_config().load()))
    except PermissionError:
        abort(403, description="Access denied to this path")
    except FileNotFoundError:
        abort(404, description="Path not found")


@app.route("/api/stream/<video_id>")
def api_stream(video_id: str):
    path = resolve_video_path(video_id)
    return stream_file(path, request.headers.get("Range"))


@app.route("/api/subtitles/<video_id>/<filename>")
def api_subtitle(video_id: str, filename: str):
    path = resolve_video_path(video_id)
    directory, name = os.path.split(path)
    subtitle = next((s for s in find_subtitles(directory, Path(name).stem) if s["filename"] == filename), None)
    if subtitle is None:
        abort(404, description="Subtitle not found")

    if request.args.get("format") == "vtt" and filename.lower().endswith(".srt"):
        with open(subtitle["path"], "r", encoding="utf-8", errors="replace") as f:
            return Response(srt_to_vtt(f.read()), mimetype="text/vtt")
    return send_file(subtitle["path"], mimetype=guess_mimetype(subtitle["path"], "text/plain"))


@app.route("/api/thumbnail/<video_id>")
def api_thumbnail(video_id: str):
    path = resolve_video_path(video_id)
    try:
        thumb = thumbnail_generator().get(video_id, path)
    except ThumbnailError as e:
        logger.warning("%s", e)
        abort(500, description="Failed to generate thumbnail")
    return send_file(thumb, mimetype="image/jpeg", max_age=86400)


@app.route("/api/embed-codes")
def api_embed_codes():
    videos = search_videos(current_videos(), request.args.get("q", ""), request.args.get("folder", ""))
    width = int_arg("width", 1920, 1, 7680)
    height = int_arg("height", 1080, 1, 4320)
    base = request.host_url.rstrip("/")

    if request.args.get("download") == "1":
        resp = Response(bulk_embed_codes(base, videos, width, height), mimetype="text/html")
        resp.headers["Content-Disposition"] = "attachment; filename=embed-codes.html"
        return resp

    return jsonify([
        {"id": v["id"], "title": v["title"], "code": embed_code(base, v["id"], v["title"], width, height)}
        for v in videos
    ])


# -----------------------------
# API: folder config
# -----------------------------
def folder_from_body() -> str:
    folder = json_body().get("folder")
    if not isinstance(folder, str) or not folder.strip():
        abort(400, description="Folder path is required")
    return folder


@app.route("/api/config/folders", methods=["GET"])
def api_get_folders():
    return jsonify({"folders": folder_config().load()})


@app.route("/api/config/folders", methods=["POST"])
def api_add_folder():
    folder = folder_from_body()
    if not os.path.isdir(os.path.expanduser(folder.strip())):
        abort(404, description="Folder does not exist")
    return jsonify({"folders": folder_config().add(folder)})


@app.route("/api/config/folders", methods=["DELETE"])
def api_remove_folder():
    folder = folder_from_body()
    return jsonify({"folders": folder_config().remove(folder)})


# -----------------------------
# API: progress & achievements
# -----------------------------
@app.route("/api/progress")
def api_progress():
    return jsonify(tracker().all_progress())


@app.route("/api/progress/<video_id>", methods=["GET"])
def api_video_progress(video_id: str):
    record = tracker().get_progress(video_id)
    if record is None:
        record = {"watched": False, "completed": False, "percentage": 0, "lastWatched": None, "completedAt": None}
    return jsonify(record)


@app.route("/api/progress/<video_id>", methods=["POST"])
def api_update_progress(video_id: str):
    try:
        decode_id(video_id)
    except ValueError:
        abort(404, description="Video not found")

    body = json_body()
    try:
        result = tracker().update(video_id, body.get("percentage"), bool(body.get("completed", False)))
    except ValueError as e:
        abort(400, description=str(e))
    return jsonify(result)


@app.route("/api/achievements")
def api_achievements():
    return jsonify(tracker().list_achievements())


@app.route("/api/stats")
def api_stats():
    t = tracker()
    stats = t.get_stats()
    achievements = t.list_achievements()
    stats["achievementsUnlocked"] = sum(1 for a in achievements if a["unlocked"])
    stats["achievementsTotal"] = len(achievements)
    return jsonify(stats)


@app.route("/api/health")
def api_health():
    return jsonify({
        "status": "ok",
        "folders": len(folder_config().load()),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    })


def main():
    import argparse
    parser = argparse.ArgumentParser(description="Serve a local video library over HTTP")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--data-dir", default=None, help="Where config/progress/stats JSON files live")
    parser.add_argument("--folder", action="append", default=[], help="Add a video folder (repeatable)")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.data_dir:
        app.config["DATA_DIR"] = str(Path(args.data_dir).expanduser().resolve())

    config = folder_config()
    config.ensure()
    for folder in args.folder:
        if not os.path.isdir(os.path.expanduser(folder)):
            raise SystemExit(f"Folder does not exist or is not a directory: {folder}")
        config.add(folder)

    logger.info("Data directory: %s", app.config["DATA_DIR"])
    logger.info("Configured folders: %d", len(config.load()))

    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)


if __name__ == "__main__":
    main()
