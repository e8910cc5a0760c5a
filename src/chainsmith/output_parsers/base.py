"""Output parser interfaces and the string parsers used by chains.

A chain hands the raw generation of its model to an output parser before
returning it from ``call``. The parser capability is asynchronous; parsers
written against :class:`BaseParser` only implement the synchronous
:meth:`BaseParser.parse` and get :meth:`BaseParser.aparse` for free.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from chainsmith.output_parsers.utils import parse_code_markdown


@runtime_checkable
class OutputParser(Protocol):
    """Capability required from an output parser by a chain."""

    async def aparse(self, output: str) -> str:
        """Turn a raw generation into the refined string."""
        ...


class BaseParser(ABC):
    """Abstract interface for parsing model outputs.

    Subclasses must implement :meth:`parse`.
    """

    @abstractmethod
    def parse(self, output: str) -> Any:
        """Parse a raw text output."""
        pass

    async def aparse(self, output: str) -> Any:
        """Asynchronously parse a raw text output."""
        return self.parse(output)

    def format(self, query: str) -> str:
        """Add format instructions to a query; the base parser adds none."""
        return query


class SimpleParser(BaseParser):
    """Identity parser: returns the generation unchanged and never fails.

    Examples:
        - Pass text through
            ```python
            >>> from chainsmith.output_parsers import SimpleParser
            >>> SimpleParser().parse("  keep me  ")
            '  keep me  '

            ```
    """

    def parse(self, output: str) -> str:
        return output


class MarkdownParser(BaseParser):
    """Return the last fenced code block of the generation.

    When the generation holds no fenced block, the stripped text is returned.

    Examples:
        - Extract a snippet
            ```python
            >>> from chainsmith.output_parsers import MarkdownParser
            >>> MarkdownParser().parse("Here:\\n```python\\nprint(1)\\n```")
            'print(1)'

            ```
    """

    def parse(self, output: str) -> str:
        return parse_code_markdown(output, only_last=True)[0]
