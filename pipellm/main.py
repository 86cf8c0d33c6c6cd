#!/usr/bin/env python3
"""
pipellm launcher.

Usage:
    pipellm <name>            run the prompt stored under <name>
    <alias>                   same, with the name taken from the invoked command
    pipellm --bash-alias      print shell aliases for every stored prompt

Environment:
    PIPELLM_CONFIG            config file (default: ~/.pipellm.yaml)
    PIPELLM_LOG_LEVEL         root log level (default: WARNING)
    PIPELLM_LOG_FILE          rotating log file (default: none)
"""

import os
import sys
import logging

from dotenv import load_dotenv

from pipellm.adapters.cli import run_cli
from pipellm.core.logger import init_logger, LogManager


def main():
    load_dotenv()

    level_name = os.getenv("PIPELLM_LOG_LEVEL", "WARNING").upper()
    init_logger(
        log_level=getattr(logging, level_name, logging.WARNING),
        log_file=os.getenv("PIPELLM_LOG_FILE") or None,
        shell_output=True,
    )
    log_manager = LogManager()

    sys.exit(run_cli(sys.argv, log_manager=log_manager))


if __name__ == "__main__":
    main()
