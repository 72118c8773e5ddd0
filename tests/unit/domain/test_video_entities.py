"""Tests for video domain entities and errors."""

from __future__ import annotations

import dataclasses

import pytest

from vidrelay.domain.entities import (
    AllStrategiesExhausted,
    IdentifierNotFound,
    InputInvalid,
    MediaStream,
    ProxyTransportFault,
    ResolutionError,
    ResolvedLink,
    VideoInfo,
)


class TestResolvedLink:
    def test_video_id_defaults_to_none(self) -> None:
        link = ResolvedLink(final_url="https://v.douyin.com/abc/")
        assert link.video_id is None

    def test_is_frozen(self) -> None:
        link = ResolvedLink(final_url="https://x", video_id="1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            link.video_id = "2"  # type: ignore[misc]


class TestVideoInfo:
    def test_payload_without_demo_flag(self, video_info: VideoInfo) -> None:
        assert video_info.to_payload() == {
            "url": video_info.url,
            "cover": video_info.cover,
            "desc": "山间日落",
        }

    def test_payload_marks_demo(self) -> None:
        info = VideoInfo(url="https://demo/flower.mp4", is_demo=True)
        payload = info.to_payload()
        assert payload["isDemo"] is True

    def test_with_url_returns_copy(self, video_info: VideoInfo) -> None:
        updated = video_info.with_url("https://other")
        assert updated.url == "https://other"
        assert updated.desc == video_info.desc
        assert video_info.url != "https://other"

    def test_with_desc_returns_copy(self, video_info: VideoInfo) -> None:
        updated = video_info.with_desc("新描述")
        assert updated.desc == "新描述"
        assert updated.url == video_info.url


class TestMediaStream:
    def test_attachment_headers(self) -> None:
        meta = MediaStream(
            content_type="video/mp4",
            filename="douyin_video.mp4",
            content_length="2048",
        )
        assert meta.response_headers() == {
            "Content-Type": "video/mp4",
            "Content-Disposition": 'attachment; filename="douyin_video.mp4"',
            "Content-Length": "2048",
        }

    def test_inline_disposition(self) -> None:
        meta = MediaStream(content_type="video/mp4", filename="douyin_video.mp4")
        headers = meta.response_headers(download=False)
        assert headers["Content-Disposition"] == 'inline; filename="douyin_video.mp4"'

    def test_length_omitted_when_unknown(self) -> None:
        meta = MediaStream(content_type="video/mp4", filename="douyin_video.mp4")
        assert "Content-Length" not in meta.response_headers()


class TestResolutionErrors:
    @pytest.mark.parametrize(
        "error_cls",
        [
            InputInvalid,
            IdentifierNotFound,
            AllStrategiesExhausted,
            ProxyTransportFault,
        ],
    )
    def test_default_message_is_public_message(
        self, error_cls: type[ResolutionError]
    ) -> None:
        exc = error_cls()
        assert isinstance(exc, ResolutionError)
        assert str(exc) == error_cls.public_message

    def test_explicit_message_wins(self) -> None:
        assert str(IdentifierNotFound("custom")) == "custom"
