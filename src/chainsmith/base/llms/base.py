"""Abstract base interface for model backends used by chains.

This module defines the ``ChatModel`` capability a chain talks to and the
``BaseLLM`` convenience base that concrete providers can extend to get the
option-merging behaviour for free.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from chainsmith.base.llms.options import CallOptions
from chainsmith.base.llms.types import GenerateResult, Message, StreamData

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Exception raised by a model backend (transport, decoding, remote error)."""

    pass


@runtime_checkable
class ChatModel(Protocol):
    """Capability required from a model by a chain."""

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        """Run a one-shot generation for ``messages``."""
        ...

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[StreamData]:
        """Open a streamed generation and return its item iterator."""
        ...

    def add_options(self, options: CallOptions) -> None:
        """Fold ``options`` into the model's own configuration."""
        ...


class BaseLLM(BaseModel, ABC):
    """BaseLLM interface.

    Subclasses implement :meth:`generate` and :meth:`stream`. The options
    held in :attr:`options` are meant to be read by those implementations
    when building a request.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="allow")

    options: CallOptions = Field(
        default_factory=CallOptions,
        description="Options applied to every request sent by this model.",
    )

    @classmethod
    def class_name(cls) -> str:
        return "base_llm"

    def add_options(self, options: CallOptions) -> None:
        """Merge ``options`` into :attr:`options`, set fields taking precedence.

        Examples:
            - Fold a temperature into a model
                ```python
                >>> from chainsmith.base.llms.options import CallOptions
                >>> from chainsmith.llms.mock import MockLLM
                >>> llm = MockLLM(options=CallOptions(max_tokens=32))
                >>> llm.add_options(CallOptions(temperature=0.2))
                >>> llm.options.temperature, llm.options.max_tokens
                (0.2, 32)

                ```
        """
        self.options = self.options.merge(options)
        logger.debug("%s options updated: %s", self.class_name(), self.options)

    @abstractmethod
    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        pass

    @abstractmethod
    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[StreamData]:
        pass

    def _request_kwargs(self) -> dict[str, Any]:
        """Return the set options as a flat dict of request keyword arguments."""
        return {
            **self.options.model_dump(exclude_none=True, exclude={"additional_kwargs"}),
            **self.options.additional_kwargs,
        }
