import os
import yaml
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path

from .errors import ConfigNotFoundError, ConfigParseError

logger = logging.getLogger("app.prompt")

CONFIG_FILENAME = ".pipellm.yaml"
CONFIG_ENV_VAR = "PIPELLM_CONFIG"

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 30.0


def default_config_path() -> Path:
    """Return $PIPELLM_CONFIG if set, else ~/.pipellm.yaml (resolved now, not at import)."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILENAME


@dataclass
class PromptEntry:
    name: str
    prompt: str


@dataclass
class Config:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    prompts: List[PromptEntry] = field(default_factory=list)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def masked(self) -> Dict[str, Any]:
        """Config as a dict with the API key hidden, for logging."""
        key = self.api_key
        return {
            "api_key": f"{key[:4]}..." if len(key) > 4 else ("***" if key else ""),
            "model": self.model,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "prompts": [p.name for p in self.prompts],
        }


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_config(data: Any) -> Config:
    """
    Build a Config from a deserialized YAML document.

    Args:
        data: Result of yaml.safe_load (None for an empty file)

    Returns:
        Populated Config

    Raises:
        ConfigParseError: If the document does not have the expected shape
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"expected a mapping at top level, got {type(data).__name__}")

    raw_prompts = data.get("prompts") or []
    if not isinstance(raw_prompts, list):
        raise ConfigParseError("'prompts' must be a list")

    prompts = []
    for index, item in enumerate(raw_prompts):
        if not isinstance(item, dict):
            raise ConfigParseError(f"prompt #{index + 1} must be a mapping with 'name' and 'prompt'")
        prompts.append(PromptEntry(name=_as_text(item.get("name")), prompt=_as_text(item.get("prompt"))))

    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        raise ConfigParseError(f"'timeout' must be a number, got {timeout!r}")

    return Config(
        api_key=_as_text(data.get("api_key")),
        model=_as_text(data.get("model")) or DEFAULT_MODEL,
        prompts=prompts,
        base_url=_as_text(data.get("base_url")) or DEFAULT_BASE_URL,
        timeout=timeout,
    )


class ConfigLoader:
    """Loads the prompt configuration from a YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else default_config_path()

    def load(self) -> Config:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, "rb") as f:
                raw = f.read()
        except OSError:
            raise ConfigNotFoundError(self.config_path)

        # invalid UTF-8 surfaces as yaml.reader.ReaderError
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigParseError(str(e)) from e

        config = parse_config(data)
        logger.debug(f"Config loaded from {self.config_path}:\n{json.dumps(config.masked(), indent=2)}")

        return config
