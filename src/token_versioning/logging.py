"""
Structured logging configuration for the token versioning engine.

Log events carry version metadata only. Raw token trees are replaced by a
size summary so large design systems never end up in log files.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, cast

import structlog
from structlog.types import FilteringBoundLogger

from .utils.objects import describe_tree, is_mapping


class TokenPayloadFilter(logging.Filter):
    """
    Filter that keeps raw token payloads out of stdlib log records.

    Records carrying a token tree in one of the payload attributes are
    rewritten with a size summary instead of being dropped.
    """

    PAYLOAD_KEYS = {
        "tokens",
        "token_tree",
        "old_value",
        "new_value",
        "snapshot",
    }

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Replace payload attributes on the record with their summaries.

        Args:
            record: Log record to filter

        Returns:
            Always True; records are rewritten, never blocked
        """
        for key in self.PAYLOAD_KEYS:
            if key in record.__dict__:
                record.__dict__[key] = _summarise(record.__dict__[key])
        return True


class TokenPayloadProcessor:
    """
    Structlog processor that summarises token payloads in event dictionaries.

    Note: single public method (__call__) following the structlog
    processor protocol.
    """

    def __init__(self, payload_keys: Optional[set] = None):
        self.payload_keys = payload_keys or TokenPayloadFilter.PAYLOAD_KEYS

    def __call__(
        self, logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        for key in self.payload_keys:
            if key in event_dict:
                event_dict[key] = _summarise(event_dict[key])
        return event_dict


def _summarise(value: Any) -> Any:
    if is_mapping(value):
        summary = describe_tree(value)
        return f"<token tree: {summary['groups']} groups, {summary['leaves']} leaves>"
    return value


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    redact_token_values: bool = True,
) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, console)
        log_file: Optional log file path
        redact_token_values: Whether to summarise raw token trees in log events
    """
    level = getattr(logging, log_level.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if redact_token_values:
        processors.append(TokenPayloadProcessor())

    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.extend([structlog.dev.ConsoleRenderer(colors=False)])

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if redact_token_values:
        console_handler.addFilter(TokenPayloadFilter())
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        if redact_token_values:
            file_handler.addFilter(TokenPayloadFilter())
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))
