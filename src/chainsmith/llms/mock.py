"""Mock model for testing and examples."""

from __future__ import annotations

import inspect
from typing import AsyncIterator, Sequence

from pydantic import Field, field_validator

from chainsmith.base.llms.base import BaseLLM
from chainsmith.base.llms.types import (
    GenerateResult,
    Message,
    StreamData,
    TokenUsage,
)
from chainsmith.configs.defaults import DEFAULT_STREAM_CHUNK_SIZE


class MockLLM(BaseLLM):
    """Mock model for testing purposes.

    Echoes the content of the first message back (or returns ``response``
    when it is set), allowing chains to run without a real backend.
    The ``stop_words`` and ``max_tokens`` options are honored: the text is
    cut before the first stop word and limited to ``max_tokens`` words.

    Attributes:
        response: Fixed text to return instead of echoing the prompt.
        chunk_size: Number of characters per streamed chunk (must be positive).
        model_name: Model name identifier (defaults to "mock-llm").
    """

    response: str | None = Field(
        default=None, description="Fixed response; echoes the prompt when unset."
    )
    chunk_size: int = Field(
        default=DEFAULT_STREAM_CHUNK_SIZE,
        gt=0,
        description="Characters per streamed chunk (must be positive)",
    )
    model_name: str = Field(default="mock-llm", description="Model name identifier")

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        """Validate that chunk_size is positive.

        Raises:
            ValueError: If chunk_size is not positive.
        """
        if v <= 0:
            raise ValueError(f"chunk_size must be positive, got {v}")
        return v

    @classmethod
    def class_name(cls) -> str:
        """Return class name."""
        return "MockLLM"

    def _get_text(self, messages: Sequence[Message]) -> str:
        if self.response is not None:
            text = self.response
        elif messages:
            text = messages[0].content or ""
        else:
            text = ""

        request = self._request_kwargs()
        for stop_word in request.get("stop_words", []):
            index = text.find(stop_word)
            if index != -1:
                text = text[:index]
        max_tokens = request.get("max_tokens")
        if max_tokens is not None:
            # tokens are whitespace separated words
            text = " ".join(text.split()[:max_tokens])
        return text

    def _get_usage(self, messages: Sequence[Message], text: str) -> TokenUsage:
        prompt_tokens = sum(len((m.content or "").split()) for m in messages)
        completion_tokens = len(text.split())
        return TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        """Return the mocked text as a single generation.

        Args:
            messages: Chat messages; the first one is echoed when no
                ``response`` is configured.

        Returns:
            GenerateResult carrying the text and a whitespace token count.
        """
        text = self._get_text(messages)
        return GenerateResult(generation=text, tokens=self._get_usage(messages, text))

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[StreamData]:
        """Stream the mocked text in ``chunk_size`` pieces.

        ``options.streaming_func`` is called with every chunk before it is
        yielded; the last item carries the token usage.
        """
        text = self._get_text(messages)
        usage = self._get_usage(messages, text)
        streaming_func = self.options.streaming_func
        pieces = [
            text[i : i + self.chunk_size] for i in range(0, len(text), self.chunk_size)
        ]

        async def gen() -> AsyncIterator[StreamData]:
            for index, piece in enumerate(pieces):
                if streaming_func is not None:
                    callback_result = streaming_func(piece)
                    if inspect.isawaitable(callback_result):
                        await callback_result
                is_last = index == len(pieces) - 1
                yield StreamData(
                    value={"content": piece, "done": is_last},
                    content=piece,
                    tokens=usage if is_last else None,
                )

        return gen()
