"""Configuration package exposing the library-wide default constants."""

from chainsmith.configs.defaults import (
    DEFAULT_NUM_WORKERS,
    DEFAULT_OUTPUT_KEY,
    DEFAULT_RESULT_KEY,
    DEFAULT_STREAM_CHUNK_SIZE,
)

__all__ = [
    "DEFAULT_OUTPUT_KEY",
    "DEFAULT_RESULT_KEY",
    "DEFAULT_NUM_WORKERS",
    "DEFAULT_STREAM_CHUNK_SIZE",
]
