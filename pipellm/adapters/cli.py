#!/usr/bin/env python3
"""
Command-line dispatcher.

The prompt to run is chosen by the first argument or, when none is given,
by the name the executable was invoked under, so one install can sit behind
many symlinks or shell aliases (summarize, translate, ...).
"""

import os
import sys
import argparse
import logging
from typing import List, Optional, TextIO

import httpx
from rich.console import Console
from rich.table import Table
from rich import box

from pipellm import __version__
from pipellm.core.config_loader import Config, ConfigLoader
from pipellm.core.errors import ConfigError, PipeLLMError, PromptNotFoundError
from pipellm.core.llm_service import LLMService, OpenAIClient
from pipellm.core.logger import LogManager
from pipellm.core.prompt_builder import PromptBuilder
from pipellm.core.stdin_reader import read_stdin


def build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Send piped text to an LLM using a prompt stored in ~/.pipellm.yaml",
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Prompt name (default: the name this command was invoked as)",
    )
    parser.add_argument(
        "--bash-alias",
        action="store_true",
        help="Print a shell alias for every configured prompt and exit",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List configured prompts and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log config, request and HTTP details to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def alias_executable(invoked_as: str) -> str:
    """Command line that re-runs this program, for use in generated aliases."""
    if os.path.basename(invoked_as) == "__main__.py":
        # started with python -m pipellm
        return f"{sys.executable} -m pipellm"
    return os.path.abspath(invoked_as)


class PipeCLI:
    """One-shot CLI: resolve prompt, read stdin, call the model, print the reply."""

    def __init__(
        self,
        config_loader: Optional[ConfigLoader] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        console: Optional[Console] = None,
        transport: Optional[httpx.BaseTransport] = None,
        executable: Optional[str] = None,
        log_manager: Optional[LogManager] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            config_loader: ConfigLoader instance (default: ~/.pipellm.yaml)
            stdin: Input stream (default: sys.stdin at call time)
            stdout: Output stream for the reply (default: sys.stdout at call time)
            console: Rich console for diagnostics (default: stderr)
            transport: httpx transport for the model API (default: network)
            executable: Command used in generated aliases (default: alias_executable(argv[0]))
            log_manager: LogManager instance for --verbose
        """
        self.config_loader = config_loader or ConfigLoader()
        self.stdin = stdin
        self.stdout = stdout
        self.console = console or Console(stderr=True, highlight=False, soft_wrap=True)
        self.transport = transport
        self.executable = executable
        self.log_manager = log_manager
        self.logger = logging.getLogger("app.prompt")

    def _out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def error(self, message: str) -> int:
        self.logger.info(message)
        self.console.print(message, markup=False)
        return 1

    def load_config(self) -> Config:
        return self.config_loader.load()

    def generate_aliases(self, config: Config, executable: str) -> None:
        out = self._out()
        for alias in PromptBuilder(config).alias_names():
            out.write(f"alias {alias}='{executable} {alias}'\n")
        out.flush()

    def list_prompts(self, config: Config) -> None:
        table = Table(title="Configured prompts", box=box.ROUNDED)
        table.add_column("Name", style="bold cyan")
        table.add_column("Prompt", style="white")

        for entry in config.prompts:
            lines = entry.prompt.strip().splitlines()
            preview = lines[0] if lines else ""
            if len(lines) > 1:
                preview += " ..."
            table.add_row(entry.name, preview)

        Console(file=self._out(), soft_wrap=True).print(table)

    def dispatch(self, config: Config, name: str) -> str:
        """
        Run the prompt stored under name against piped input.

        Returns:
            The model's reply

        Raises:
            PromptNotFoundError: If name matches no configured prompt
            PipeLLMError, httpx.TransportError: On API failures
        """
        template = PromptBuilder(config).resolve(name)
        user_input = read_stdin(self.stdin)

        client = OpenAIClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            transport=self.transport,
        )
        service = LLMService(config, client=client, logger=self.logger)
        return service.send_prompt(template, user_input)

    def run(self, argv: List[str]) -> int:
        """
        Run one invocation.

        Args:
            argv: Full argument vector, argv[0] being the invoked executable

        Returns:
            Process exit code
        """
        invoked_as = argv[0] if argv else "pipellm"
        args = build_parser(os.path.basename(invoked_as)).parse_args(argv[1:])

        if args.verbose and self.log_manager is not None:
            _, message = self.log_manager.set_level("all", logging.DEBUG)
            self.logger.debug(f"{message}: {self.log_manager.get_status()}")

        try:
            config = self.load_config()
        except ConfigError as e:
            return self.error(f"Error loading config: {e}")

        if args.bash_alias:
            self.generate_aliases(config, self.executable or alias_executable(invoked_as))
            return 0

        if args.list:
            self.list_prompts(config)
            return 0

        # An explicit argument wins over the invoked name
        name = args.name if args.name is not None else os.path.basename(invoked_as)

        try:
            reply = self.dispatch(config, name)
        except PromptNotFoundError as e:
            return self.error(f"No prompt found for name: {e.name}")
        except (PipeLLMError, httpx.TransportError) as e:
            return self.error(f"Error calling model: {e}")

        out = self._out()
        out.write(reply + "\n")
        out.flush()
        return 0


def run_cli(argv: Optional[List[str]] = None, **kwargs) -> int:
    """
    Run the CLI dispatcher.

    Args:
        argv: Argument vector (default: sys.argv)
        **kwargs: Passed to PipeCLI

    Returns:
        Process exit code
    """
    cli = PipeCLI(**kwargs)
    return cli.run(sys.argv if argv is None else argv)
