import asyncio
from typing import Any, AsyncIterator, List, Optional, Sequence

import pytest

from chainsmith.base.llms.base import LLMError
from chainsmith.base.llms.options import CallOptions
from chainsmith.base.llms.types import GenerateResult, Message, StreamData
from chainsmith.output_parsers import BaseParser
from chainsmith.prompts import PromptTemplate


class RecordingLLM:
    """Model double implementing the chat model capability without a base class.

    Every interaction is appended to ``events`` so tests can check ordering.
    """

    def __init__(
        self,
        generation: str = "abc",
        stream_items: Optional[List[StreamData]] = None,
        fail_stream_after: Optional[int] = None,
        fail_generate: bool = False,
        fail_open_stream: bool = False,
        **metadata: Any,
    ):
        self.generation = generation
        self.metadata = metadata
        self.stream_items = stream_items or []
        self.fail_stream_after = fail_stream_after
        self.fail_generate = fail_generate
        self.fail_open_stream = fail_open_stream
        self.events: List[str] = []
        self.options_received: List[CallOptions] = []
        self.messages_received: List[Sequence[Message]] = []
        self.result: Optional[GenerateResult] = None
        self.stream_closed = False
        self.items_produced = 0

    def add_options(self, options: CallOptions) -> None:
        self.events.append("add_options")
        self.options_received.append(options)

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        self.events.append("generate")
        self.messages_received.append(messages)
        if self.fail_generate:
            raise LLMError("backend unavailable")
        self.result = GenerateResult(generation=self.generation, **self.metadata)
        return self.result

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[StreamData]:
        self.events.append("stream")
        self.messages_received.append(messages)
        if self.fail_open_stream:
            raise LLMError("cannot open stream")

        async def gen() -> AsyncIterator[StreamData]:
            try:
                for index, item in enumerate(self.stream_items):
                    if self.fail_stream_after is not None and index == self.fail_stream_after:
                        raise LLMError("connection reset")
                    self.items_produced += 1
                    yield item
                    await asyncio.sleep(0)
            finally:
                self.stream_closed = True

        return gen()


class HangingLLM:
    """Model double whose calls never finish until cancelled."""

    def __init__(self):
        self.started = asyncio.Event()
        self.cancelled = False
        self.stream_closed = False

    def add_options(self, options: CallOptions) -> None:
        pass

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return GenerateResult(generation="never")

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[StreamData]:
        async def gen() -> AsyncIterator[StreamData]:
            try:
                yield StreamData(content="first")
                await asyncio.Event().wait()
                yield StreamData(content="never")
            finally:
                self.stream_closed = True

        return gen()


class StreamHandle:
    """Model stream backed by a handle that records when it is closed."""

    def __init__(self, items: Sequence[StreamData] = ()):
        self._items = list(items)
        self.closed = False

    def __aiter__(self) -> "StreamHandle":
        return self

    async def __anext__(self) -> StreamData:
        if self.closed or not self._items:
            raise StopAsyncIteration
        return self._items.pop(0)

    async def aclose(self) -> None:
        self.closed = True


class HandleLLM:
    """Model double whose stream is a :class:`StreamHandle`."""

    def __init__(self, items: Sequence[StreamData] = ()):
        self.handle = StreamHandle(items)

    def add_options(self, options: CallOptions) -> None:
        pass

    async def generate(self, messages: Sequence[Message]) -> GenerateResult:
        return GenerateResult(generation="handle")

    async def stream(self, messages: Sequence[Message]) -> StreamHandle:
        return self.handle


class UpperParser(BaseParser):
    """Uppercase the generation."""

    def parse(self, output: str) -> str:
        return output.upper()


class ConstantParser(BaseParser):
    """Replace the generation with a constant."""

    def __init__(self, value: str = "OK"):
        self.value = value

    def parse(self, output: str) -> str:
        return self.value


class FailingParser(BaseParser):
    """Reject every generation."""

    def parse(self, output: str) -> str:
        raise ValueError(f"cannot parse {output!r}")


@pytest.fixture
def name_prompt() -> PromptTemplate:
    return PromptTemplate("Mi nombre es: {nombre}")


@pytest.fixture
def recording_llm() -> RecordingLLM:
    return RecordingLLM()


@pytest.fixture
def recording_llm_cls() -> type:
    return RecordingLLM


@pytest.fixture
def hanging_llm() -> HangingLLM:
    return HangingLLM()


@pytest.fixture
def handle_llm() -> HandleLLM:
    return HandleLLM([StreamData(content="a"), StreamData(content="b")])


@pytest.fixture
def upper_parser() -> UpperParser:
    return UpperParser()


@pytest.fixture
def constant_parser() -> ConstantParser:
    return ConstantParser("OK")


@pytest.fixture
def failing_parser() -> FailingParser:
    return FailingParser()
