"""Exceptions raised by chains.

Every failure surfaced by a chain is a :class:`ChainError`. Failures coming
from a collaborator (prompt, model, output parser) are re-raised as the
matching subclass with the original exception kept as ``__cause__``.
"""

__all__ = [
    "ChainError",
    "MissingObjectError",
    "MissingInputVariableError",
    "PromptError",
    "ModelError",
    "OutputParserError",
]


class ChainError(Exception):
    """Base class for all chain failures."""

    pass


class MissingObjectError(ChainError):
    """A required part was not provided when building a chain."""

    def __init__(self, which: str) -> None:
        self.which = which
        super().__init__(which)


class MissingInputVariableError(ChainError):
    """The prompt arguments lack a variable the chain expects."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing input variable: {name}")


class PromptError(ChainError):
    """The prompt could not be rendered."""

    pass


class ModelError(ChainError):
    """The model failed to generate or to stream."""

    pass


class OutputParserError(ChainError):
    """The output parser rejected the generation."""

    pass
