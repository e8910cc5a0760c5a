"""Model-level call options and their merge semantics."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

StreamingFunc = Callable[[str], Awaitable[None] | None]


class CallOptions(BaseModel):
    """Tunables a model applies to every request it sends.

    Every field defaults to ``None`` meaning "not set, use the backend default".
    Backends decide which fields they honor; unknown provider specific knobs
    go into ``additional_kwargs``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    candidate_count: int | None = Field(
        default=None, description="Number of candidates to generate."
    )
    max_tokens: int | None = Field(
        default=None, description="Maximum number of tokens to generate."
    )
    temperature: float | None = Field(
        default=None, description="Sampling temperature."
    )
    stop_words: list[str] | None = Field(
        default=None, description="Sequences that stop generation."
    )
    top_k: int | None = Field(default=None, description="Top-k sampling cutoff.")
    top_p: float | None = Field(default=None, description="Nucleus sampling mass.")
    seed: int | None = Field(default=None, description="Sampling seed.")
    min_length: int | None = Field(
        default=None, description="Minimum generated length."
    )
    max_length: int | None = Field(
        default=None, description="Maximum generated length."
    )
    repetition_penalty: float | None = Field(
        default=None, description="Penalty applied to repeated tokens."
    )
    frequency_penalty: float | None = Field(
        default=None, description="Penalty proportional to token frequency."
    )
    presence_penalty: float | None = Field(
        default=None, description="Penalty for tokens already present."
    )
    request_timeout: float | None = Field(
        default=None, description="Request timeout in seconds."
    )
    streaming_func: StreamingFunc | None = Field(
        default=None,
        description="Callback receiving every streamed chunk of text.",
        exclude=True,
    )
    additional_kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="Provider specific options forwarded as-is.",
    )

    def merge(self, other: "CallOptions") -> "CallOptions":
        """Return a copy of these options with every field set on ``other`` applied.

        Args:
            other (CallOptions):
                Options to fold in. Fields left as ``None`` on ``other`` keep
                the current value; ``additional_kwargs`` are merged key by key.

        Returns:
            CallOptions: A new options object; neither input is modified.

        Examples:
            - Override temperature and keep the rest
                ```python
                >>> from chainsmith.base.llms.options import CallOptions
                >>> base = CallOptions(temperature=0.7, max_tokens=64)
                >>> merged = base.merge(CallOptions(temperature=0.2))
                >>> merged.temperature, merged.max_tokens
                (0.2, 64)

                ```
            - Merge provider specific options
                ```python
                >>> base = CallOptions(additional_kwargs={"mirostat": 2, "num_ctx": 2048})
                >>> base.merge(CallOptions(additional_kwargs={"num_ctx": 4096})).additional_kwargs
                {'mirostat': 2, 'num_ctx': 4096}

                ```
        """
        updates: dict[str, Any] = {}
        for name in type(self).model_fields:
            if name == "additional_kwargs":
                continue
            value = getattr(other, name)
            if value is not None:
                updates[name] = value
        updates["additional_kwargs"] = {
            **self.additional_kwargs,
            **other.additional_kwargs,
        }
        return self.model_copy(update=updates)
