"""Utility helpers used across the chainsmith codebase."""

from chainsmith.utils.base import run_jobs

__all__ = ["run_jobs"]
