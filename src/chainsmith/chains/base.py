"""The uniform contract every chain exposes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Mapping, Sequence

from chainsmith.base.llms.types import GenerateResult, StreamData
from chainsmith.chains.errors import ChainError
from chainsmith.configs.defaults import (
    DEFAULT_NUM_WORKERS,
    DEFAULT_OUTPUT_KEY,
    DEFAULT_RESULT_KEY,
)
from chainsmith.utils.base import run_jobs

PromptArgs = Mapping[str, Any]


class Chain(ABC):
    """A composable unit turning named inputs into a generation.

    Subclasses implement :meth:`call`. ``invoke``, ``execute`` and ``batch``
    are expressed in terms of it; ``stream`` is opt-in.
    """

    def input_keys(self) -> list[str]:
        """Variable names the chain expects, in a stable order."""
        return []

    def output_keys(self) -> list[str]:
        """Keys under which :meth:`execute` stores the generation."""
        return [DEFAULT_OUTPUT_KEY]

    @abstractmethod
    async def call(self, args: PromptArgs) -> GenerateResult:
        """Run the chain and return the full generate result."""

    async def invoke(self, args: PromptArgs) -> str:
        """Run the chain and return only the generated text."""
        result = await self.call(args)
        return result.generation

    async def stream(self, args: PromptArgs) -> AsyncIterator[StreamData]:
        """Run the chain and return the incremental output."""
        raise ChainError(f"Streaming is not supported by {type(self).__name__}")

    async def execute(self, args: PromptArgs) -> dict[str, Any]:
        """Run the chain and return its outputs keyed by name.

        Returns:
            dict[str, Any]: The generation under the first output key and the
                complete :class:`GenerateResult` under ``"generate_result"``.
        """
        result = await self.call(args)
        output_keys = self.output_keys()
        output_key = output_keys[0] if output_keys else DEFAULT_OUTPUT_KEY
        return {output_key: result.generation, DEFAULT_RESULT_KEY: result}

    async def batch(
        self,
        inputs: Sequence[PromptArgs],
        workers: int = DEFAULT_NUM_WORKERS,
        show_progress: bool = False,
    ) -> list[GenerateResult]:
        """Call the chain once per item of ``inputs`` with bounded concurrency.

        Args:
            inputs (Sequence[PromptArgs]):
                Prompt arguments, one mapping per call.
            workers (int):
                Maximum number of calls in flight.
            show_progress (bool):
                Display a ``tqdm`` progress bar.

        Returns:
            list[GenerateResult]: Results in the order of ``inputs``.
        """
        jobs = [self.call(args) for args in inputs]
        return await run_jobs(
            jobs,
            show_progress=show_progress,
            workers=workers,
            desc=f"Running {type(self).__name__}",
        )
