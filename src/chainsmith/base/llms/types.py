"""Core data models exchanged with models (messages, results, stream items)."""

from __future__ import annotations

from collections.abc import Sequence as ABCSequence
from enum import Enum
from typing import Any, Iterator, Literal

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Self


class MessageRole(str, Enum):
    """Message role."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"
    TOOL = "tool"


class TextChunk(BaseModel):
    """Plain text chunk."""

    type: Literal["text"] = "text"
    content: str = ""


class Message(BaseModel):
    """A single chat message made of a role and text chunks."""

    role: MessageRole = MessageRole.USER
    additional_kwargs: dict[str, Any] = Field(default_factory=dict)
    chunks: list[TextChunk] = Field(default_factory=list)

    def __init__(self, /, content: Any | None = None, **data: Any) -> None:
        """Constructor.

        If content was passed and contained text, store a single TextChunk.
        If content was passed and it was a list, assume it's a list of chunks and store it.
        """
        if content is not None:
            if isinstance(content, str):
                data["chunks"] = [TextChunk(content=content)]
            elif isinstance(content, list):
                data["chunks"] = content

        super().__init__(**data)

    @property
    def content(self) -> str | None:
        """The cumulative content of all text chunks in the message."""
        texts = [chunk.content for chunk in self.chunks]
        if not texts:
            return None
        return texts[0] if len(texts) == 1 else "\n".join(texts)

    @content.setter
    def content(self, content: str) -> None:
        """Set text content.

        Raises:
            ValueError: if the message holds more than one chunk.
        """
        if len(self.chunks) > 1:
            raise ValueError(
                "Message contains multiple chunks, use 'Message.chunks' instead."
            )
        self.chunks = [TextChunk(content=content)]

    def __str__(self) -> str:
        """Return a human-readable representation of the message."""
        return f"{self.role.value}: {self.content}"

    @classmethod
    def from_str(
        cls,
        content: str,
        role: MessageRole | str = MessageRole.USER,
        **kwargs: Any,
    ) -> Self:
        if isinstance(role, str):
            role = MessageRole(role)
        return cls(role=role, chunks=[TextChunk(content=content)], **kwargs)


class MessageList(BaseModel, ABCSequence):
    """A collection of Message objects with helper methods."""

    messages: list[Message] = Field(default_factory=list)

    def __iter__(self) -> Iterator[Message]:
        """Iterate through contained messages in order."""
        return iter(self.messages)

    def __len__(self) -> int:
        """Return the number of messages in the list."""
        return len(self.messages)

    def __getitem__(self, index: int | slice) -> Message | MessageList:
        """Retrieve a message or slice of messages."""
        if isinstance(index, slice):
            return MessageList(messages=self.messages[index])
        return self.messages[index]

    def to_prompt(self) -> str:
        """Convert messages to a prompt string.

        Examples:
            - Render a two-message conversation
                ```python
                >>> from chainsmith.base.llms.types import Message, MessageList, MessageRole
                >>> messages = MessageList(messages=[
                ...     Message(role=MessageRole.SYSTEM, content="Be brief."),
                ...     Message(role=MessageRole.USER, content="Hi"),
                ... ])
                >>> print(messages.to_prompt())
                system: Be brief.
                user: Hi

                ```
        """
        return "\n".join(str(message) for message in self.messages)

    def filter_by_role(self, role: MessageRole) -> "MessageList":
        """Return messages with a specific role."""
        return MessageList(messages=[m for m in self.messages if m.role == role])

    def append(self, message: Message) -> None:
        """Add a message to the collection."""
        self.messages.append(message)

    @classmethod
    def from_str(cls, prompt: str) -> "MessageList":
        """Create from a string prompt."""
        return cls(messages=[Message(role=MessageRole.USER, content=prompt)])


class TokenUsage(BaseModel):
    """Token counts reported by a model for one request.

    Attributes:
        prompt_tokens(int):
            Tokens consumed by the prompt.
        completion_tokens(int):
            Tokens produced by the model.
        total_tokens(int):
            Sum of prompt and completion tokens.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class GenerateResult(BaseModel):
    """Result of a one-shot generation.

    Fields:
        generation: The generated text.
        tokens: Token usage reported by the model, if any.

    Any extra keyword passed at construction (e.g. provider metadata) is kept
    as an additional field and survives copies untouched.
    """

    model_config = ConfigDict(extra="allow")

    generation: str = ""
    tokens: TokenUsage | int | None = None

    def __str__(self) -> str:
        """Return the generated text."""
        return self.generation


class StreamData(BaseModel):
    """One incremental unit of a streamed generation.

    Fields:
        value: Raw provider payload for this chunk.
        content: Text that just streamed in.
        tokens: Token usage, usually only present on the last chunk.
    """

    value: Any = None
    content: str = ""
    tokens: TokenUsage | None = None

    def __str__(self) -> str:
        """Return the chunk text."""
        return self.content

