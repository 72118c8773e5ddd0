"""Tests for the embedded-JSON video search."""

from __future__ import annotations

from typing import Any

from vidrelay.infrastructure.douyin.deep_search import (
    MAX_SEARCH_DEPTH,
    find_video_info,
    match_video_shape,
)


def _nest(node: Any, levels: int) -> Any:
    for i in range(levels):
        node = {"level": i, "child": node} if i % 2 else [node]
    return node


_MODERN = {
    "desc": "modern",
    "video": {
        "playApi": "//www.douyin.com/aweme/v1/play/?video_id=v0",
        "cover": {"urlList": ["https://p3/cover.jpeg"]},
    },
}

_LEGACY = {
    "desc": "legacy",
    "video": {
        "play_addr": {"url_list": ["https://aweme.snssdk.com/aweme/v1/playwm/?video_id=v1"]},
        "cover": {"url_list": ["https://p3/legacy.jpeg"]},
    },
}

_DOWNLOAD = {
    "video": {
        "download_addr": {"url_list": ["https://aweme.snssdk.com/aweme/v1/playwm/?d=1"]},
    },
}


class TestMatchVideoShape:
    def test_modern_shape(self) -> None:
        info = match_video_shape(_MODERN)
        assert info is not None
        assert info.url == "https://www.douyin.com/aweme/v1/play/?video_id=v0"
        assert info.cover == "https://p3/cover.jpeg"
        assert info.desc == "modern"

    def test_modern_shape_dynamic_cover_fallback(self) -> None:
        node = {
            "video": {
                "playApi": "https://x/play",
                "dynamicCover": {"urlList": ["https://p3/dyn.webp"]},
            }
        }
        info = match_video_shape(node)
        assert info is not None
        assert info.cover == "https://p3/dyn.webp"
        assert info.desc == ""

    def test_legacy_shape_rewrites_watermark(self) -> None:
        info = match_video_shape(_LEGACY)
        assert info is not None
        assert info.url == "https://aweme.snssdk.com/aweme/v1/play/?video_id=v1"
        assert info.cover == "https://p3/legacy.jpeg"

    def test_download_shape_used_as_is(self) -> None:
        info = match_video_shape(_DOWNLOAD)
        assert info is not None
        assert info.url == "https://aweme.snssdk.com/aweme/v1/playwm/?d=1"

    def test_modern_preferred_over_legacy_in_same_node(self) -> None:
        node = {"video": {**_LEGACY["video"], **_MODERN["video"]}}
        info = match_video_shape(node)
        assert info is not None
        assert "video_id=v0" in info.url

    def test_empty_play_api_falls_through(self) -> None:
        node = {"video": {"playApi": "", **_LEGACY["video"]}}
        info = match_video_shape(node)
        assert info is not None
        assert "video_id=v1" in info.url

    def test_video_not_a_mapping(self) -> None:
        assert match_video_shape({"video": "nope"}) is None


class TestFindVideoInfo:
    def test_found_at_arbitrary_depth(self) -> None:
        tree = _nest(_LEGACY, 20)
        info = find_video_info(tree)
        assert info is not None
        assert info.desc == "legacy"

    def test_first_in_traversal_order_wins(self) -> None:
        tree = {"a": {"inner": _LEGACY}, "b": _MODERN}
        info = find_video_info(tree)
        assert info is not None
        assert info.desc == "legacy"

    def test_parent_match_before_children(self) -> None:
        node = {"desc": "outer", "video": {"playApi": "https://x/outer"}, "nested": _LEGACY}
        info = find_video_info(node)
        assert info is not None
        assert info.desc == "outer"

    def test_absent(self) -> None:
        tree = {"a": [1, "two", {"video": {}}], "b": None, "c": {"video": {"cover": {}}}}
        assert find_video_info(tree) is None

    def test_scalars(self) -> None:
        assert find_video_info("video") is None
        assert find_video_info(None) is None
        assert find_video_info(42) is None

    def test_cyclic_input_terminates(self) -> None:
        tree: dict[str, Any] = {"a": {}}
        tree["a"]["self"] = tree
        tree["list"] = [tree]
        assert find_video_info(tree) is None

    def test_cyclic_input_still_finds_match(self) -> None:
        tree: dict[str, Any] = {"loop": None, "data": {"item": _MODERN}}
        tree["loop"] = tree
        info = find_video_info(tree)
        assert info is not None
        assert info.desc == "modern"

    def test_depth_ceiling(self) -> None:
        tree = _nest(_MODERN, MAX_SEARCH_DEPTH + 5)
        assert find_video_info(tree) is None
        assert find_video_info(tree, max_depth=MAX_SEARCH_DEPTH + 10) is not None

    def test_shared_subtree_visited_once(self) -> None:
        shared = {"video": {}}
        tree = {"a": shared, "b": shared, "c": _DOWNLOAD}
        info = find_video_info(tree)
        assert info is not None
        assert "d=1" in info.url
