"""
Logging infrastructure for ProductLens.

Provides:
- Structured JSON logging for file output
- Rich console output for terminal
- Contextual logging with url/strategy context
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson
from rich.markup import escape

if TYPE_CHECKING:
    from rich.console import Console

CONTEXT_FIELDS = ("url", "strategy", "field")


# =============================================================================
# JSON Formatter for File Logging
# =============================================================================


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return orjson.dumps(log_data, default=str).decode("utf-8")


# =============================================================================
# Rich Console Handler
# =============================================================================


class RichConsoleHandler(logging.Handler):
    """Handler that outputs to Rich console with formatting."""

    STYLES = {
        logging.DEBUG: "dim",
        logging.INFO: "default",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "bold red",
    }

    def __init__(self, console: "Console | None" = None, level: int = logging.INFO):
        super().__init__(level)
        if console is None:
            from rich.console import Console

            console = Console(stderr=True)
        self.console = console

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            style = self.STYLES.get(record.levelno, "default")

            prefix = ""
            if getattr(record, "strategy", None):
                prefix = f"[cyan]{escape('[' + record.strategy + ']')}[/cyan] "

            self.console.print(f"{prefix}[{style}]{escape(message)}[/{style}]", highlight=False)

            if record.exc_info:
                self.console.print_exception()

        except Exception:
            self.handleError(record)


# =============================================================================
# Logger Configuration
# =============================================================================


def setup_logging(
    level: str = "INFO",
    log_file: Path | str | None = None,
    json_format: bool = True,
    rich_console: bool = True,
    console: "Console | None" = None,
) -> logging.Logger:
    """Set up logging for ProductLens.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (optional)
        json_format: Use JSON format for file logs
        rich_console: Use Rich for console output
        console: Rich console to write to (default: stderr)

    Returns:
        Root logger for productlens
    """
    log_level = getattr(logging, level.upper())

    logger = logging.getLogger("productlens")
    logger.setLevel(log_level)
    logger.handlers.clear()

    if rich_console:
        console_handler: logging.Handler = RichConsoleHandler(console=console)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    console_handler.setLevel(log_level)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Capture all levels to file

        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )

        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (will be prefixed with 'productlens.')

    Returns:
        Logger instance
    """
    if name:
        return logging.getLogger(f"productlens.{name}")
    return logging.getLogger("productlens")


# =============================================================================
# Contextual Logging Adapter
# =============================================================================


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that adds url/strategy context to log records."""

    def __init__(
        self,
        logger: logging.Logger,
        url: str | None = None,
        strategy: str | None = None,
    ):
        super().__init__(logger, {})
        self.url = url
        self.strategy = strategy

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})

        if self.url:
            extra.setdefault("url", self.url)
        if self.strategy:
            extra.setdefault("strategy", self.strategy)

        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(
        self,
        url: str | None = None,
        strategy: str | None = None,
    ) -> ContextualLogger:
        """Create a new logger with additional context."""
        return ContextualLogger(
            self.logger,
            url=url or self.url,
            strategy=strategy or self.strategy,
        )


def get_contextual_logger(
    name: str | None = None,
    url: str | None = None,
    strategy: str | None = None,
) -> ContextualLogger:
    """Get a contextual logger with url/strategy context.

    Args:
        name: Logger name
        url: Source URL for context
        strategy: Strategy name for context

    Returns:
        ContextualLogger instance
    """
    return ContextualLogger(get_logger(name), url=url, strategy=strategy)
