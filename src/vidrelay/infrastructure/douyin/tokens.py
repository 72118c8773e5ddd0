"""Fresh session-like cookie tokens for anonymous Douyin web requests."""

from __future__ import annotations

import base64
import secrets

_MS_TOKEN_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)
MS_TOKEN_LENGTH = 107
TTWID_BYTES = 48


def generate_ms_token(length: int = MS_TOKEN_LENGTH) -> str:
    """Random ``msToken``-like string from a 64 symbol alphabet."""
    raw = secrets.token_bytes(length)
    return "".join(_MS_TOKEN_ALPHABET[b % len(_MS_TOKEN_ALPHABET)] for b in raw)


def generate_ttwid() -> str:
    """Random ``ttwid``-like token: 48 random bytes, base64url without padding."""
    raw = secrets.token_bytes(TTWID_BYTES)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def session_cookie_header(extra: str = "") -> str:
    """Build a ``Cookie`` header value with freshly generated tokens."""
    cookie = f"msToken={generate_ms_token()}; ttwid={generate_ttwid()}"
    if extra:
        cookie = f"{cookie}; {extra}"
    return cookie
