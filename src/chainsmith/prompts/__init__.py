"""Prompt templates and utilities for formatting model inputs."""

from chainsmith.base.llms.types import Message, MessageRole
from chainsmith.prompts.base import (
    BasePromptTemplate,
    ChatPromptTemplate,
    PromptFormatError,
    PromptFormatter,
    PromptTemplate,
    PromptValue,
)

__all__ = [
    "PromptTemplate",
    "ChatPromptTemplate",
    "BasePromptTemplate",
    "PromptFormatter",
    "PromptFormatError",
    "PromptValue",
    "Message",
    "MessageRole",
]
