"""
Core LLM service for one-shot prompt completion.

This module contains the business logic for:
- Building the single user message from a template and piped input
- Calling the chat-completion API
- Extracting the first reply from the response body
"""

import json
import logging
from typing import Dict, List, Optional, Union

import httpx
from langchain_core.messages import BaseMessage, HumanMessage

from .config_loader import Config, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .errors import EmptyResponseError, ResponseParseError
from .prompt_builder import PromptBuilder


def messages_to_dict(messages: List[BaseMessage]) -> List[Dict[str, str]]:
    """Convert LangChain messages to the chat-completion wire format."""
    result = []
    for msg in messages:
        if isinstance(msg, HumanMessage):
            result.append({"role": "user", "content": msg.content})
    return result


def parse_chat_response(body: Union[bytes, str]) -> str:
    """
    Extract the first reply from a chat-completion response body.

    Args:
        body: Raw response body

    Returns:
        Text of the first choice's message ("" if the model sent null content)

    Raises:
        ResponseParseError: If the body is not JSON or not shaped like a completion
        EmptyResponseError: If the body holds zero choices
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise ResponseParseError(f"failed to parse response: {e}") from e

    if not isinstance(payload, dict):
        raise ResponseParseError(f"failed to parse response: expected an object, got {type(payload).__name__}")

    choices = payload.get("choices") or []
    if not isinstance(choices, list):
        raise ResponseParseError("failed to parse response: 'choices' is not a list")

    if not choices:
        message = "no response from model"
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            message += f": {error['message']}"
        raise EmptyResponseError(message)

    first = choices[0]
    if not isinstance(first, dict):
        raise ResponseParseError("failed to parse response: choice is not an object")

    message = first.get("message") or {}
    if not isinstance(message, dict):
        raise ResponseParseError("failed to parse response: choice message is not an object")

    content = message.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise ResponseParseError(f"failed to parse response: content is {type(content).__name__}, expected text")
    return content


class OpenAIClient:
    """Client for an OpenAI-compatible chat-completion endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # None means a real network transport
        self.transport = transport

    def chat_completion(self, model: str, messages: List[BaseMessage]) -> str:
        """
        Send one chat completion request.

        Args:
            model: Model identifier (e.g., gpt-3.5-turbo)
            messages: List of LangChain message objects

        Returns:
            Response content from the model

        Raises:
            httpx.TransportError: On connection, DNS or timeout failures (not retried)
            ResponseParseError: On a body that is not a chat completion
            EmptyResponseError: On a completion with no choices
        """
        body = {"model": model, "messages": messages_to_dict(messages)}
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.post(f"{self.base_url}/chat/completions", json=body, headers=headers)

        return parse_chat_response(response.content)


class LLMService:
    """
    Core service for prompt completion.

    Joins the resolved template with piped input, sends it as a single user
    message and returns the model's reply.
    """

    def __init__(
        self,
        config: Config,
        client: Optional[OpenAIClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize LLM service.

        Args:
            config: Loaded Config
            client: Optional client; built from config when omitted
            logger: Optional logger instance
        """
        self.config = config
        self.prompt_builder = PromptBuilder(config)
        self.client = client or OpenAIClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )
        self.logger = logger or logging.getLogger("app.prompt")

    def build_messages(self, template: str, user_input: str = "") -> List[BaseMessage]:
        return [HumanMessage(content=self.prompt_builder.build(template, user_input))]

    def send_prompt(self, template: str, user_input: str = "") -> str:
        """
        Send a prompt and get the reply.

        Args:
            template: Resolved prompt template
            user_input: Piped input ("" when none)

        Returns:
            Model's response
        """
        messages = self.build_messages(template, user_input)

        if self.logger.isEnabledFor(logging.DEBUG):
            api_call = {"model": self.config.model, "messages": messages_to_dict(messages)}
            self.logger.debug(f"API call:\n{json.dumps(api_call, indent=2)}")

        response = self.client.chat_completion(model=self.config.model, messages=messages)
        self.logger.debug(f"Response: {len(response)} chars")
        return response
