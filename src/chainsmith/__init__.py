"""chainsmith: compose a prompt, a model and an output parser into a chain."""

from chainsmith.base.llms import (
    BaseLLM,
    CallOptions,
    ChatModel,
    GenerateResult,
    LLMError,
    Message,
    MessageRole,
    StreamData,
    TokenUsage,
)
from chainsmith.chains import (
    Chain,
    ChainCallOptions,
    ChainError,
    LLMChain,
    LLMChainBuilder,
    MissingInputVariableError,
    MissingObjectError,
    ModelError,
    OutputParserError,
    PromptError,
)
from chainsmith.output_parsers import (
    BaseParser,
    MarkdownParser,
    OutputParserException,
    SimpleParser,
)
from chainsmith.prompts import ChatPromptTemplate, PromptFormatError, PromptTemplate

__version__ = "0.1.0"

__all__ = [
    "BaseLLM",
    "CallOptions",
    "ChatModel",
    "GenerateResult",
    "LLMError",
    "Message",
    "MessageRole",
    "StreamData",
    "TokenUsage",
    "Chain",
    "ChainCallOptions",
    "ChainError",
    "LLMChain",
    "LLMChainBuilder",
    "MissingInputVariableError",
    "MissingObjectError",
    "ModelError",
    "OutputParserError",
    "PromptError",
    "BaseParser",
    "MarkdownParser",
    "OutputParserException",
    "SimpleParser",
    "ChatPromptTemplate",
    "PromptFormatError",
    "PromptTemplate",
]
