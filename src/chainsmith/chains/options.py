"""Call-time options a chain folds into its model when it is built."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chainsmith.base.llms.options import CallOptions, StreamingFunc


class ChainCallOptions(BaseModel):
    """Tunables meaningful at call time rather than model construction time.

    Unknown options are rejected: constructing the object with a field that
    is not declared below raises ``pydantic.ValidationError``. Fields left as
    ``None`` are not forwarded to the model.

    Examples:
        - Convert to model options
            ```python
            >>> from chainsmith.chains import ChainCallOptions
            >>> options = ChainCallOptions(temperature=0.2, stop_words=["\\n"])
            >>> llm_options = options.to_llm_options()
            >>> llm_options.temperature, llm_options.stop_words
            (0.2, ['\\n'])

            ```
        - Unknown options fail fast
            ```python
            >>> ChainCallOptions(temprature=0.2)  # doctest: +ELLIPSIS
            Traceback (most recent call last):
            ...
            pydantic_core._pydantic_core.ValidationError: 1 validation error for ChainCallOptions
            ...

            ```
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0.0)
    stop_words: list[str] | None = None
    top_k: int | None = Field(default=None, ge=0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    seed: int | None = None
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    repetition_penalty: float | None = None
    request_timeout: float | None = Field(default=None, gt=0)
    streaming_func: StreamingFunc | None = Field(default=None, exclude=True)

    def to_llm_options(self) -> CallOptions:
        """Return the equivalent model-level :class:`CallOptions`."""
        return CallOptions(
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            stop_words=list(self.stop_words) if self.stop_words is not None else None,
            top_k=self.top_k,
            top_p=self.top_p,
            seed=self.seed,
            min_length=self.min_length,
            max_length=self.max_length,
            repetition_penalty=self.repetition_penalty,
            request_timeout=self.request_timeout,
            streaming_func=self.streaming_func,
        )
