"""Depth-first search for a video record inside untrusted embedded JSON.

Douyin has shipped at least three shapes for the ``video`` sub-object over
the years.  Server-rendered page data nests it at unpredictable depths,
so the whole tree is walked and every mapping is tested against each
shape in order:

1. modern   ``video.playApi`` (string), cover ``video.cover.urlList``
2. legacy   ``video.play_addr.url_list`` (watermark marker rewritten)
3. download ``video.download_addr.url_list`` (used as-is)

The first match during traversal wins.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from vidrelay.domain.entities.video import VideoInfo

from .constants import ensure_scheme, strip_watermark

MAX_SEARCH_DEPTH = 64

_ShapeMatcher = Callable[[Mapping[str, Any], Mapping[str, Any]], VideoInfo | None]


def _first_url(container: Any, key: str = "url_list") -> str:
    """Return ``container[key][0]`` when it is a non-empty string, else ``""``."""
    if not isinstance(container, Mapping):
        return ""
    urls = container.get(key)
    if isinstance(urls, Sequence) and not isinstance(urls, str) and urls:
        first = urls[0]
        if isinstance(first, str):
            return first
    return ""


def _desc(node: Mapping[str, Any]) -> str:
    desc = node.get("desc")
    return desc if isinstance(desc, str) else ""


def _match_play_api(
    node: Mapping[str, Any], video: Mapping[str, Any]
) -> VideoInfo | None:
    play_api = video.get("playApi")
    if not isinstance(play_api, str) or not play_api:
        return None
    cover = _first_url(video.get("cover"), "urlList") or _first_url(
        video.get("dynamicCover"), "urlList"
    )
    return VideoInfo(url=ensure_scheme(play_api), cover=cover, desc=_desc(node))


def _match_play_addr(
    node: Mapping[str, Any], video: Mapping[str, Any]
) -> VideoInfo | None:
    src = _first_url(video.get("play_addr"))
    if not src:
        return None
    return VideoInfo(
        url=strip_watermark(src),
        cover=_first_url(video.get("cover")),
        desc=_desc(node),
    )


def _match_download_addr(
    node: Mapping[str, Any], video: Mapping[str, Any]
) -> VideoInfo | None:
    src = _first_url(video.get("download_addr"))
    if not src:
        return None
    return VideoInfo(url=src, cover=_first_url(video.get("cover")), desc=_desc(node))


_SHAPES: tuple[_ShapeMatcher, ...] = (
    _match_play_api,
    _match_play_addr,
    _match_download_addr,
)


def match_video_shape(node: Mapping[str, Any]) -> VideoInfo | None:
    """Test a single mapping against the known shapes (no descent)."""
    video = node.get("video")
    if not isinstance(video, Mapping):
        return None
    for shape in _SHAPES:
        info = shape(node, video)
        if info is not None:
            return info
    return None


def find_video_info(node: Any, max_depth: int = MAX_SEARCH_DEPTH) -> VideoInfo | None:
    """Search *node* (dicts, lists, scalars) for the first video record.

    Branches deeper than *max_depth* are not explored, and containers
    already visited are skipped so self-referential input terminates.
    """
    return _search(node, 0, max_depth, set())


def _search(
    node: Any, depth: int, max_depth: int, visited: set[int]
) -> VideoInfo | None:
    if depth > max_depth:
        return None

    if isinstance(node, Mapping):
        children: Any = node.values()
    elif isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        children = node
    else:
        return None

    if id(node) in visited:
        return None
    visited.add(id(node))

    if isinstance(node, Mapping):
        info = match_video_shape(node)
        if info is not None:
            return info

    for child in children:
        result = _search(child, depth + 1, max_depth, visited)
        if result is not None:
            return result
    return None
