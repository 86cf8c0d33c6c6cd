"""pipellm - pipe text through stored LLM prompts."""

__version__ = "0.1.0"
