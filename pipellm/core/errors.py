class PipeLLMError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(PipeLLMError):
    pass


class ConfigNotFoundError(ConfigError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"config file not found at {path}")


class ConfigParseError(ConfigError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"failed to parse config: {detail}")


class PromptNotFoundError(PipeLLMError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no prompt found for name: {name}")


class ResponseParseError(PipeLLMError):
    """The model API answered with something that is not a chat completion."""


class EmptyResponseError(PipeLLMError):
    """The model API answered with zero choices."""
