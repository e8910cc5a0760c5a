"""Utilities and base classes for parsing model outputs."""

from chainsmith.output_parsers.base import (
    BaseParser,
    MarkdownParser,
    OutputParser,
    SimpleParser,
)
from chainsmith.output_parsers.utils import OutputParserException

__all__ = [
    "BaseParser",
    "OutputParser",
    "SimpleParser",
    "MarkdownParser",
    "OutputParserException",
]
