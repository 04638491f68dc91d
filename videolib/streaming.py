import mimetypes
import os
import re
from typing import Iterator, Optional, Tuple

from flask import Response, send_file
from werkzeug.exceptions import RequestedRangeNotSatisfiable

CHUNK_SIZE = 64 * 1024
DEFAULT_MIMETYPE = "video/mp4"

RANGE_RE = re.compile(r"^\s*bytes\s*=\s*(\d*)\s*-\s*(\d*)\s*$", re.IGNORECASE)

mimetypes.add_type("video/x-matroska", ".mkv")
mimetypes.add_type("video/webm", ".webm")
mimetypes.add_type("text/vtt", ".vtt")


def guess_mimetype(path: str, default: str = DEFAULT_MIMETYPE) -> str:
    return mimetypes.guess_type(path)[0] or default


def parse_range(header: Optional[str], size: int) -> Optional[Tuple[int, int]]:
    """
    Parse a single ``bytes=start-end`` range against a file of ``size`` bytes.

    Returns the inclusive (start, end) window, or None when there is no usable
    header (missing, malformed or multi-range) and the whole file should be sent.
    Raises RequestedRangeNotSatisfiable when the range lies outside the file.
    """
    if not header:
        return None
    m = RANGE_RE.match(header)
    if not m:
        return None
    start_s, end_s = m.group(1), m.group(2)
    if not start_s and not end_s:
        return None

    if not start_s:
        # suffix range: last N bytes
        suffix = int(end_s)
        if suffix == 0 or size == 0:
            raise RequestedRangeNotSatisfiable(length=size)
        return max(0, size - suffix), size - 1

    start = int(start_s)
    end = int(end_s) if end_s else size - 1
    end = min(end, size - 1)
    if start >= size or start > end:
        raise RequestedRangeNotSatisfiable(length=size)
    return start, end


def iter_file(path: str, start: int, length: int, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    with open(path, "rb") as f:
        f.seek(start)
        remaining = length
        while remaining > 0:
            data = f.read(min(chunk_size, remaining))
            if not data:
                break
            remaining -= len(data)
            yield data


def stream_file(path: str, range_header: Optional[str] = None, mimetype: Optional[str] = None) -> Response:
    """Whole-file 200 or single-range 206 response for ``path``."""
    size = os.path.getsize(path)
    mimetype = mimetype or guess_mimetype(path)

    window = parse_range(range_header, size)
    if window is None:
        resp = send_file(path, mimetype=mimetype, conditional=False)
        resp.headers["Accept-Ranges"] = "bytes"
        return resp

    start, end = window
    length = end - start + 1
    resp = Response(iter_file(path, start, length), 206, mimetype=mimetype, direct_passthrough=True)
    resp.headers.add("Content-Range", f"bytes {start}-{end}/{size}")
    resp.headers.add("Accept-Ranges", "bytes")
    resp.headers.add("Content-Length", str(length))
    return resp
