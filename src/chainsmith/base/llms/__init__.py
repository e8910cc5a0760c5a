"""LLM base package: abstract interfaces and shared models for model backends."""

from chainsmith.base.llms.base import BaseLLM, ChatModel, LLMError
from chainsmith.base.llms.options import CallOptions
from chainsmith.base.llms.types import (
    GenerateResult,
    Message,
    MessageList,
    MessageRole,
    StreamData,
    TextChunk,
    TokenUsage,
)

__all__ = [
    "BaseLLM",
    "ChatModel",
    "LLMError",
    "CallOptions",
    "MessageRole",
    "Message",
    "MessageList",
    "TextChunk",
    "TokenUsage",
    "GenerateResult",
    "StreamData",
]
