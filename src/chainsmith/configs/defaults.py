"""Default constants and configuration values used across the library."""

DEFAULT_OUTPUT_KEY = "output"
DEFAULT_RESULT_KEY = "generate_result"

DEFAULT_NUM_WORKERS = 4
DEFAULT_STREAM_CHUNK_SIZE = 4
