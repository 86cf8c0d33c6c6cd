import logging
from typing import Iterable, List, Optional

from .config_loader import Config, PromptEntry
from .errors import PromptNotFoundError

logger = logging.getLogger("app.prompt")

SEPARATOR = "\n\n"


def _normalize(name: str) -> str:
    return name.strip().casefold()


def find_prompt(prompts: Iterable[PromptEntry], name: str) -> Optional[str]:
    """
    Find the template stored under a name.

    Names are compared trimmed and case-insensitively; the first match in
    configured order wins. A blank lookup name never matches.

    Returns:
        The template text, or None when nothing matches
    """
    wanted = _normalize(name or "")
    if not wanted:
        return None

    for entry in prompts:
        if _normalize(entry.name) == wanted:
            return entry.prompt
    return None


def build_prompt(template: str, user_input: str = "") -> str:
    """Append piped input to the template, separated by a blank line."""
    if user_input:
        return template + SEPARATOR + user_input
    return template


class PromptBuilder:
    """Resolves stored prompts by alias name and assembles the final message."""

    def __init__(self, config: Config):
        self.config = config

    def resolve(self, name: str) -> str:
        """
        Resolve an alias name to its template.

        Raises:
            PromptNotFoundError: If no entry matches or the matching template is empty
        """
        template = find_prompt(self.config.prompts, name)
        if not template:
            raise PromptNotFoundError(name)
        logger.debug(f"Resolved prompt '{name.strip()}' ({len(template)} chars)")
        return template

    def build(self, template: str, user_input: str = "") -> str:
        return build_prompt(template, user_input)

    def alias_names(self) -> List[str]:
        """Lowercased prompt names in configured order."""
        return [entry.name.lower() for entry in self.config.prompts]
