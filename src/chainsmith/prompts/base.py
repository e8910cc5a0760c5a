"""Prompt formatter capability and the template implementations shipped with it."""

from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, WithJsonSchema
from typing_extensions import Annotated

from chainsmith.base.llms.types import Message, MessageList, TextChunk
from chainsmith.prompts.utils import format_string, get_template_vars

AnnotatedCallable = Annotated[
    Callable,
    WithJsonSchema({"type": "string"}),
    PlainSerializer(lambda x: f"{x.__module__}.{x.__name__}", return_type=str),
]


class PromptFormatError(ValueError):
    """Raised when a prompt cannot be rendered from the given arguments."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing prompt variables: {', '.join(self.missing)}")


class PromptValue(BaseModel):
    """A rendered prompt, convertible to chat messages or plain text."""

    messages: List[Message] = Field(default_factory=list)

    def to_chat_messages(self) -> List[Message]:
        """Return the rendered messages in order."""
        return list(self.messages)

    def to_string(self) -> str:
        """Render the messages as ``role: content`` lines."""
        return MessageList(messages=self.messages).to_prompt()

    def __str__(self) -> str:
        return self.to_string()


@runtime_checkable
class PromptFormatter(Protocol):
    """Capability required from a prompt by a chain."""

    def get_input_variables(self) -> List[str]:
        """Return the variable names the prompt needs, in a stable order."""
        ...

    def format_prompt(self, args: Mapping[str, Any]) -> PromptValue:
        """Render the prompt from ``args``."""
        ...


class BasePromptTemplate(BaseModel, ABC):
    """Abstract base class for prompt templates.

    Subclasses render their templates into a list of messages; this base
    resolves defaults and computed variables and rejects missing ones.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    template_vars: List[str]
    kwargs: Dict[str, Any] = Field(default_factory=dict)
    function_mappings: Optional[Dict[str, AnnotatedCallable]] = Field(
        default_factory=dict,  # type: ignore
        description=(
            "Function mappings (Optional). This is a mapping from template "
            "variable names to functions that take in the current kwargs and "
            "return a string."
        ),
    )

    def _map_function_vars(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """
        For keys in function_mappings, compute values and combine w/ kwargs.

        A function mapping overrides a fixed value passed under the same name.
        """
        function_mappings = self.function_mappings or {}
        new_kwargs = {k: v(**kwargs) for k, v in function_mappings.items()}
        for k, v in kwargs.items():
            if k not in new_kwargs:
                new_kwargs[k] = v
        return new_kwargs

    def get_input_variables(self) -> List[str]:
        """Variables a caller has to provide (no default, not computed)."""
        provided = set(self.kwargs) | set(self.function_mappings or {})
        return [var for var in self.template_vars if var not in provided]

    def partial_format(self, **kwargs: Any) -> "BasePromptTemplate":
        """Return a copy of the template with some variables pre-filled."""
        return self.model_copy(update={"kwargs": {**self.kwargs, **kwargs}})

    def format_prompt(self, args: Mapping[str, Any]) -> PromptValue:
        """Render the template.

        Args:
            args (Mapping[str, Any]):
                Values for the template variables. Extra keys are ignored.

        Returns:
            PromptValue: The rendered messages.

        Raises:
            PromptFormatError: If a template variable has no value.

        Examples:
            - Render a one-variable template
                ```python
                >>> from chainsmith.prompts import PromptTemplate
                >>> prompt = PromptTemplate("Mi nombre es: {nombre}")
                >>> prompt.format_prompt({"nombre": "luis"}).to_string()
                'user: Mi nombre es: luis'

                ```
            - Missing variables are reported by name
                ```python
                >>> prompt.format_prompt({})
                Traceback (most recent call last):
                ...
                chainsmith.prompts.base.PromptFormatError: Missing prompt variables: nombre

                ```
        """
        all_kwargs = self._map_function_vars({**self.kwargs, **args})
        missing = [var for var in self.template_vars if var not in all_kwargs]
        if missing:
            raise PromptFormatError(missing)
        return PromptValue(messages=self.format_messages(**all_kwargs))

    def format(self, **kwargs: Any) -> str:
        """Render the template to a single string."""
        return self.format_prompt(kwargs).to_string()

    @abstractmethod
    def format_messages(self, **kwargs: Any) -> List[Message]:
        """Render the template into a list of chat messages."""

    @abstractmethod
    def get_template(self) -> str:
        """Return the raw template string used by this prompt."""


class PromptTemplate(BasePromptTemplate):
    """Prompt template rendering a single user message."""

    template: str

    def __init__(
        self,
        template: str,
        metadata: Optional[Dict[str, Any]] = None,
        function_mappings: Optional[Dict[str, Callable]] = None,
        **kwargs: Any,
    ) -> None:
        """Create a plain-text prompt template.

        Args:
            template: The raw template string (e.g., "Hello {name}").
            metadata: Optional metadata dictionary.
            function_mappings: Optional mapping of template vars to callables.
            **kwargs: Default values for template variables.
        """
        super().__init__(
            template=template,
            template_vars=get_template_vars(template),
            kwargs=kwargs,
            metadata=metadata or {},
            function_mappings=function_mappings,
        )

    def format_messages(self, **kwargs: Any) -> List[Message]:
        prompt = format_string(self.template, **kwargs)
        return list(MessageList.from_str(prompt))

    def get_template(self) -> str:
        return self.template


class ChatPromptTemplate(BasePromptTemplate):
    """Prompt template for chat-based prompts, one template per message."""

    message_templates: List[Message]

    def __init__(
        self,
        message_templates: Sequence[Message],
        metadata: Optional[Dict[str, Any]] = None,
        function_mappings: Optional[Dict[str, Callable]] = None,
        **kwargs: Any,
    ):
        """Create a chat-style prompt template.

        Args:
            message_templates: Sequence of message templates to render.
            metadata: Optional metadata dictionary.
            function_mappings: Optional mapping of template vars to callables.
            **kwargs: Default values for template variables.
        """
        template_vars: List[str] = []
        for message_template in message_templates:
            for var in get_template_vars(message_template.content or ""):
                if var not in template_vars:
                    template_vars.append(var)

        super().__init__(
            message_templates=list(message_templates),
            kwargs=kwargs,
            metadata=metadata or {},
            template_vars=template_vars,
            function_mappings=function_mappings,
        )

    @classmethod
    def from_messages(
        cls,
        message_templates: Union[List[Tuple[str, str]], List[Message]],
        **kwargs: Any,
    ) -> "ChatPromptTemplate":
        """Build a template from ``(role, text)`` pairs or messages.

        Examples:
            - Build from role/text tuples
                ```python
                >>> from chainsmith.prompts import ChatPromptTemplate
                >>> prompt = ChatPromptTemplate.from_messages([
                ...     ("system", "You answer in {language}."),
                ...     ("user", "{question}"),
                ... ])
                >>> prompt.get_input_variables()
                ['language', 'question']

                ```
        """
        if message_templates and isinstance(message_templates[0], tuple):
            message_templates = [
                Message.from_str(role=role, content=content)  # type: ignore[arg-type]
                for role, content in message_templates
            ]
        return cls(message_templates=message_templates, **kwargs)  # type: ignore[arg-type]

    def format_messages(self, **kwargs: Any) -> List[Message]:
        messages: List[Message] = []
        for message_template in self.message_templates:
            message = message_template.model_copy()
            message.chunks = [
                TextChunk(content=format_string(chunk.content, **kwargs))
                for chunk in message_template.chunks
            ]
            messages.append(message)
        return messages

    def get_template(self) -> str:
        return MessageList(messages=self.message_templates).to_prompt()
