"""Structural cache key encoding and decoding."""

from cacheinfo.keys.codec import KeyCodec

__all__ = [
    "KeyCodec",
]
