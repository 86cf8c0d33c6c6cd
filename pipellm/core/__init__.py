"""Core business logic modules."""

from .config_loader import Config, ConfigLoader, PromptEntry
from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    EmptyResponseError,
    PipeLLMError,
    PromptNotFoundError,
    ResponseParseError,
)
from .llm_service import LLMService, OpenAIClient
from .prompt_builder import PromptBuilder
from .stdin_reader import read_stdin

__all__ = [
    "Config",
    "ConfigLoader",
    "PromptEntry",
    "PromptBuilder",
    "LLMService",
    "OpenAIClient",
    "read_stdin",
    "PipeLLMError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "PromptNotFoundError",
    "ResponseParseError",
    "EmptyResponseError",
]
