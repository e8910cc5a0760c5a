"""Utility functions for prompt formatting and variable extraction."""

import re
from typing import Any, Dict, List, Optional


class SafeFormatter:
    """Safe string formatter that does not raise KeyError if key is missing."""

    def __init__(self, format_dict: Optional[Dict[str, Any]] = None):
        """Initialize SafeFormatter with an optional format dictionary."""
        self.format_dict = format_dict or {}

    def format(self, format_string: str) -> str:
        """Format a string, leaving unknown keys unchanged."""
        return re.sub(r"{([^{}]+)}", self._replace_match, format_string)

    def parse(self, format_string: str) -> List[str]:
        """Extract variable names from a format string."""
        return re.findall(
            r"{([a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)*)}", format_string
        )

    def _replace_match(self, match: re.Match) -> str:
        key = match.group(1)
        return str(self.format_dict.get(key, match.group(0)))


def format_string(string_to_format: str, **kwargs: Any) -> str:
    """Format a string with kwargs."""
    formatter = SafeFormatter(format_dict=kwargs)
    return formatter.format(string_to_format)


def get_template_vars(template_str: str) -> List[str]:
    """Get template variables from a template string, in order and without duplicates."""
    variables: List[str] = []
    formatter = SafeFormatter()

    for variable_name in formatter.parse(template_str):
        if variable_name and variable_name not in variables:
            variables.append(variable_name)

    return variables
