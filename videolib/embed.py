from html import escape
from typing import Iterable

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 360
BULK_WIDTH = 1920
BULK_HEIGHT = 1080


def embed_url(base_url: str, video_id: str) -> str:
    return f"{base_url.rstrip('/')}/embed/{video_id}"


def embed_code(base_url: str, video_id: str, title: str,
               width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> str:
    return (
        f'<iframe src="{escape(embed_url(base_url, video_id))}" width="{int(width)}" height="{int(height)}" '
        f'frameborder="0" allow="autoplay; fullscreen; picture-in-picture" allowfullscreen '
        f'title="{escape(title)}"></iframe>'
    )


def bulk_embed_codes(base_url: str, videos: Iterable[dict],
                     width: int = BULK_WIDTH, height: int = BULK_HEIGHT) -> str:
    blocks = []
    for v in videos:
        # "--" would close the comment early
        label = v["title"].replace("--", "- -")
        blocks.append(f"<!-- {label} -->\n{embed_code(base_url, v['id'], v['title'], width, height)}\n")
    return "\n".join(blocks)
