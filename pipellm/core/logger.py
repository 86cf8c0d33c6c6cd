import logging
import sys
import os
from logging.handlers import RotatingFileHandler


class OneLineExceptionFormatter(logging.Formatter):
    """Format exceptions on a single line for cleaner logs."""

    def formatException(self, exc_info):
        result = super().formatException(exc_info)
        return repr(result)

    def format(self, record):
        result = super().format(record)
        if record.exc_text:
            result = result.replace("\n", " | ")
        return result


def init_logger(
    log_level=logging.WARNING,
    log_file=None,
    file_size=2 * 1024 * 1024,
    file_count=2,
    shell_output=False,
    log_file_mode="a",
    log_format="%(asctime)s %(levelname)s %(name)s %(funcName)s(%(lineno)d) %(message)s",
):
    """
    Initialize the root logger with an optional rotating file and stderr output.

    stdout is never used: it carries the model's reply.

    Args:
        log_level: Logging level (default: WARNING)
        log_file: Path to log file, or None for no file
        file_size: Max size per log file in bytes
        file_count: Number of backup files to keep
        shell_output: Whether to also output to stderr
        log_file_mode: File mode ('a' for append, 'w' for overwrite)
        log_format: Log message format string

    Returns:
        Configured root logger
    """
    main_logger = logging.getLogger()
    main_logger.setLevel(log_level)
    log_formatter = OneLineExceptionFormatter(log_format)

    # Clear existing handlers to prevent duplicates
    main_logger.handlers = []

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)

        log_rotate_handler = RotatingFileHandler(
            log_file,
            mode=log_file_mode,
            maxBytes=file_size,
            backupCount=file_count,
            encoding="utf-8",
            delay=True,
        )
        log_rotate_handler.setFormatter(log_formatter)
        log_rotate_handler.setLevel(log_level)
        main_logger.addHandler(log_rotate_handler)

    if shell_output:
        stream_log_handler = logging.StreamHandler(stream=sys.stderr)
        stream_log_handler.setFormatter(log_formatter)
        stream_log_handler.setLevel(log_level)
        main_logger.addHandler(stream_log_handler)

    if not main_logger.handlers:
        # Keep the last-resort handler from echoing warnings onto the terminal
        main_logger.addHandler(logging.NullHandler())

    return main_logger


class LogManager:
    """
    Manages component logger levels.

    Components group related loggers so they can be raised or lowered
    together; the root logger is lowered automatically when needed.
    """

    COMPONENTS = {
        "prompt": {
            "default": logging.INFO,
            "description": "Application logs (config, prompts, API calls)",
            "loggers": ["app.prompt"],
        },
        "http": {
            "default": logging.WARNING,
            "description": "HTTP request/response logs",
            "loggers": ["httpx", "httpcore"],
        },
    }

    def __init__(self, root_logger=None):
        self.root_logger = root_logger or logging.getLogger()
        self._component_loggers = {}

        for component, config in self.COMPONENTS.items():
            for logger_name in config["loggers"]:
                logger = logging.getLogger(logger_name)
                logger.setLevel(config["default"])
                self._component_loggers.setdefault(component, []).append(logger)

    def set_level(self, component, level):
        """
        Set log level for a component ("all" for every component).

        Returns:
            tuple: (success: bool, message: str)
        """
        level_name = logging.getLevelName(level)

        if component == "all":
            components_to_set = list(self.COMPONENTS.keys())
        elif component in self.COMPONENTS:
            components_to_set = [component]
        else:
            return False, f"Unknown component: {component}"

        root_adjusted = False
        if self.root_logger.level > level:
            self.root_logger.setLevel(level)
            for handler in self.root_logger.handlers:
                handler.setLevel(level)
            root_adjusted = True

        for comp in components_to_set:
            for logger in self._component_loggers[comp]:
                logger.setLevel(level)

        if component == "all":
            msg = f"All components set to {level_name}"
        else:
            msg = f"{component.capitalize()} logs set to {level_name}"
        if root_adjusted:
            msg += f" (root level auto-adjusted to {level_name})"

        return True, msg

    def get_status(self):
        """
        Get current log levels for all components.

        Returns:
            dict: {"root": level_name, "components": {component: level_name}}
        """
        status = {
            "root": logging.getLevelName(self.root_logger.level),
            "components": {},
        }
        for component, loggers in self._component_loggers.items():
            if loggers:
                status["components"][component] = logging.getLevelName(loggers[0].level)
        return status
