"""Helpers for extracting content from model text.

This module provides the exception raised by output parsers and a helper to
pull fenced code blocks out of markdown formatted generations.
"""

import re
from typing import List

__all__ = ["OutputParserException", "parse_code_markdown"]


class OutputParserException(Exception):
    """Exception raised for errors encountered during output parsing."""

    pass


def parse_code_markdown(text: str, only_last: bool) -> List[str]:
    r"""Extract code blocks from fenced markdown.

    Args:
        text (str): The markdown text to parse.
        only_last (bool): If True, return only the last code block.

    Returns:
        List[str]: List of code block contents. When no fence is found the
            stripped text (without surrounding quotes or backticks) is
            returned as the only element.

    Examples:
        - Pull the last block out of a generation
            ```python
            >>> from chainsmith.output_parsers.utils import parse_code_markdown
            >>> parse_code_markdown("a\n```sql\nSELECT 1\n```\n```\nSELECT 2\n```", only_last=True)
            ['SELECT 2']

            ```
        - Plain text is returned stripped
            ```python
            >>> parse_code_markdown("  `x = 1`  ", only_last=True)
            ['x = 1']

            ```
    """
    pattern = r"```[a-zA-Z0-9_+-]*\n?(.*?)```"

    matches = [match.strip() for match in re.findall(pattern, text, re.DOTALL)]
    if matches:
        return [matches[-1]] if only_last else matches

    candidate = text.strip()
    for quote in ('"', "'", "`"):
        if len(candidate) > 1 and candidate.startswith(quote) and candidate.endswith(quote):
            candidate = candidate[1:-1]
    return [candidate.strip()]
