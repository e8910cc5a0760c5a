"""Chain composing a prompt, a model and an output parser."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, List, Optional

from chainsmith.base.llms.base import ChatModel
from chainsmith.base.llms.types import GenerateResult, Message, StreamData
from chainsmith.chains.base import Chain, PromptArgs
from chainsmith.chains.errors import (
    ChainError,
    MissingInputVariableError,
    MissingObjectError,
    ModelError,
    OutputParserError,
    PromptError,
)
from chainsmith.chains.options import ChainCallOptions
from chainsmith.configs.defaults import DEFAULT_OUTPUT_KEY
from chainsmith.output_parsers import OutputParser, SimpleParser
from chainsmith.prompts.base import PromptFormatter

logger = logging.getLogger(__name__)


class LLMChain(Chain):
    """Render a prompt, send it to a model and post-process the answer.

    Instances are built with :class:`LLMChainBuilder` and are read-only
    afterwards, so one chain can serve concurrent tasks.

    Args:
        prompt (PromptFormatter): Declares the input variables and renders
            them into chat messages.
        llm (ChatModel): Model receiving the rendered messages.
        output_key (str): Name of the single output of the chain.
        output_parser (OutputParser): Applied to the generation by
            :meth:`call` only.

    Examples:
        - Echo a rendered prompt through the mock model
            ```python
            >>> import asyncio
            >>> from chainsmith.chains import LLMChainBuilder
            >>> from chainsmith.llms import MockLLM
            >>> from chainsmith.prompts import PromptTemplate
            >>> chain = (
            ...     LLMChainBuilder()
            ...     .prompt(PromptTemplate("Mi nombre es: {nombre}"))
            ...     .llm(MockLLM())
            ...     .build()
            ... )
            >>> chain.input_keys(), chain.output_keys()
            (['nombre'], ['output'])
            >>> asyncio.run(chain.invoke({"nombre": "luis"}))
            'Mi nombre es: luis'

            ```

    See Also:
        LLMChainBuilder: Validates the wiring and folds call options.
    """

    def __init__(
        self,
        prompt: PromptFormatter,
        llm: ChatModel,
        output_key: str = DEFAULT_OUTPUT_KEY,
        output_parser: Optional[OutputParser] = None,
    ) -> None:
        self._prompt = prompt
        self._llm = llm
        self._output_key = output_key
        self._output_parser = output_parser or SimpleParser()

    @property
    def prompt(self) -> PromptFormatter:
        return self._prompt

    @property
    def llm(self) -> ChatModel:
        return self._llm

    @property
    def output_key(self) -> str:
        return self._output_key

    @property
    def output_parser(self) -> OutputParser:
        return self._output_parser

    def input_keys(self) -> list[str]:
        return list(self._prompt.get_input_variables())

    def output_keys(self) -> list[str]:
        return [self._output_key]

    def _messages(self, args: PromptArgs) -> List[Message]:
        """Render ``args`` into chat messages.

        Raises:
            MissingInputVariableError: If an input key is absent from ``args``.
            PromptError: If the prompt fails to render.
        """
        for key in self.input_keys():
            if key not in args:
                raise MissingInputVariableError(key)
        try:
            prompt = self._prompt.format_prompt(args)
            messages = prompt.to_chat_messages()
        except Exception as e:
            raise PromptError(f"Failed to format prompt: {e}") from e
        logger.debug("Prompt: %s", prompt)
        return messages

    async def _generate(self, args: PromptArgs) -> GenerateResult:
        messages = self._messages(args)
        try:
            return await self._llm.generate(messages)
        except Exception as e:
            raise ModelError(f"Model failed to generate: {e}") from e

    async def call(self, args: PromptArgs) -> GenerateResult:
        """Run the chain and return the generate result with the parsed generation.

        Args:
            args (PromptArgs): Values for the prompt variables.

        Returns:
            GenerateResult: A copy of the model result whose ``generation``
                went through the output parser; every other field is the
                model's own.

        Raises:
            MissingInputVariableError: An input key is absent from ``args``.
            PromptError: The prompt failed to render.
            ModelError: The model failed.
            OutputParserError: The output parser rejected the generation.
        """
        result = await self._generate(args)
        try:
            generation = await self._output_parser.aparse(result.generation)
        except Exception as e:
            raise OutputParserError(f"Failed to parse output: {e}") from e
        return result.model_copy(update={"generation": generation})

    async def invoke(self, args: PromptArgs) -> str:
        """Run the chain and return the raw generation.

        The output parser is not applied; use :meth:`call` for parsed output.

        Raises:
            MissingInputVariableError: An input key is absent from ``args``.
            PromptError: The prompt failed to render.
            ModelError: The model failed.
        """
        result = await self._generate(args)
        return result.generation

    async def stream(self, args: PromptArgs) -> AsyncIterator[StreamData]:
        """Render the prompt, open the model stream and return its items.

        Rendering and opening the stream happen before this coroutine returns,
        so their failures are raised here. The returned iterator yields the
        model items unchanged and in order; an error raised by the model while
        streaming surfaces as :class:`ModelError` from the iterator. The output
        parser is not applied.

        Examples:
            - Collect the streamed chunks
                ```python
                >>> import asyncio
                >>> from chainsmith.chains import LLMChain
                >>> from chainsmith.llms import MockLLM
                >>> from chainsmith.prompts import PromptTemplate
                >>> chain = LLMChain(PromptTemplate("{text}"), MockLLM(chunk_size=3))
                >>> async def collect():
                ...     stream = await chain.stream({"text": "hello"})
                ...     return [item.content async for item in stream]
                >>> asyncio.run(collect())
                ['hel', 'lo']

                ```
        """
        messages = self._messages(args)
        try:
            llm_stream = await self._llm.stream(messages)
        except Exception as e:
            raise ModelError(f"Model failed to open stream: {e}") from e
        return _ModelStream(llm_stream)


class _ModelStream:
    """Async iterator over a model stream that re-raises its errors as ``ModelError``.

    Closing it closes the model stream, whether or not iteration started.
    Items are passed through unchanged.
    """

    def __init__(self, llm_stream: AsyncIterator[StreamData]) -> None:
        self._iterator = aiter(llm_stream)
        self._closed = False

    def __aiter__(self) -> "_ModelStream":
        return self

    async def __anext__(self) -> StreamData:
        if self._closed:
            raise StopAsyncIteration
        try:
            return await anext(self._iterator)
        except StopAsyncIteration:
            await self.aclose()
            raise
        except Exception as e:
            await self.aclose()
            raise ModelError(f"Model failed while streaming: {e}") from e
        except BaseException:
            # cancellation propagates as-is
            await self.aclose()
            raise

    async def aclose(self) -> None:
        """Close the model stream. Calling it again does nothing."""
        if self._closed:
            return
        self._closed = True
        aclose = getattr(self._iterator, "aclose", None)
        if aclose is not None:
            await aclose()

    def __del__(self) -> None:
        if getattr(self, "_closed", True):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        loop.create_task(self.aclose())


class LLMChainBuilder:
    """Collect the parts of an :class:`LLMChain` and build it once.

    Setters return the builder so calls can be chained. :meth:`build`
    validates the wiring and consumes the builder.

    Examples:
        - Missing parts are reported by name
            ```python
            >>> from chainsmith.chains import LLMChainBuilder
            >>> from chainsmith.llms import MockLLM
            >>> LLMChainBuilder().llm(MockLLM()).build()
            Traceback (most recent call last):
            ...
            chainsmith.chains.errors.MissingObjectError: Prompt must be set

            ```
    """

    def __init__(self) -> None:
        self._prompt: Optional[PromptFormatter] = None
        self._llm: Optional[ChatModel] = None
        self._output_key: Optional[str] = None
        self._options: Optional[ChainCallOptions] = None
        self._output_parser: Optional[OutputParser] = None
        self._consumed = False

    def prompt(self, prompt: PromptFormatter) -> "LLMChainBuilder":
        self._prompt = prompt
        return self

    def llm(self, llm: ChatModel) -> "LLMChainBuilder":
        self._llm = llm
        return self

    def output_key(self, output_key: str) -> "LLMChainBuilder":
        self._output_key = output_key
        return self

    def options(self, options: ChainCallOptions) -> "LLMChainBuilder":
        self._options = options
        return self

    def output_parser(self, output_parser: OutputParser) -> "LLMChainBuilder":
        self._output_parser = output_parser
        return self

    def build(self) -> LLMChain:
        """Validate the collected parts and build the chain.

        When options were set they are converted to model options and folded
        into the model with ``add_options`` before the chain is returned.

        Returns:
            LLMChain: The configured chain.

        Raises:
            MissingObjectError: The prompt or the model was not set.
            ChainError: The builder was already used.
        """
        if self._consumed:
            raise ChainError("LLMChainBuilder has already been built")
        self._consumed = True

        if self._prompt is None:
            raise MissingObjectError("Prompt must be set")
        if self._llm is None:
            raise MissingObjectError("LLM must be set")

        llm = self._llm
        if self._options is not None:
            llm_options = self._options.to_llm_options()
            logger.debug("Folding chain options into model: %s", llm_options)
            llm.add_options(llm_options)

        chain = LLMChain(
            prompt=self._prompt,
            llm=llm,
            output_key=(
                self._output_key if self._output_key is not None else DEFAULT_OUTPUT_KEY
            ),
            output_parser=self._output_parser or SimpleParser(),
        )
        self._prompt = self._llm = self._output_parser = self._options = None
        return chain