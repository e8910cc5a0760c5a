"""Model implementations shipped with the library."""

from chainsmith.llms.mock import MockLLM

__all__ = ["MockLLM"]
