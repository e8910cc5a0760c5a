"""Chains: the uniform call/invoke/stream surface and the LLM chain."""

from chainsmith.chains.base import Chain, PromptArgs
from chainsmith.chains.errors import (
    ChainError,
    MissingInputVariableError,
    MissingObjectError,
    ModelError,
    OutputParserError,
    PromptError,
)
from chainsmith.chains.llm_chain import LLMChain, LLMChainBuilder
from chainsmith.chains.options import ChainCallOptions

__all__ = [
    "Chain",
    "PromptArgs",
    "LLMChain",
    "LLMChainBuilder",
    "ChainCallOptions",
    "ChainError",
    "MissingObjectError",
    "MissingInputVariableError",
    "PromptError",
    "ModelError",
    "OutputParserError",
]
