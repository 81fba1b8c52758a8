"""
Structured Logger Module

Configures structlog for JSON-formatted structured logging with correlation IDs.
Every component logs through this module so that a single profile request can
be traced from source scraping through the completion call to the fallback.

Example Usage:
    from profile_graph.utils.logger import get_logger

    logger = get_logger(
        correlation_id="a1b2c3d4-e5f6-7890-abcd-ef1234567890",
        phase="generation",
        component="knowledge_graph_generator"
    )

    logger.info("Calling completion endpoint", model="gpt-3.5-turbo")
    logger.warning("API key not configured, using template")
    logger.error("Completion call failed", error="Timeout after 30s")

Log Levels:
    - DEBUG: Prompt sizes, per-field reconciliation fallbacks
    - INFO: Source scraping progress, completion call lifecycle
    - WARNING: Template fallbacks, skipped sources
    - ERROR: Failed page loads, failed completion calls
"""

import logging
import sys
import uuid
from pathlib import Path
from typing import Optional
import structlog
from structlog.types import BindableLogger, EventDict, WrappedLogger


def mask_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Processor to mask sensitive credentials in log output.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with masked credentials

    Masks:
        - password, api_key, token, secret, credential, auth fields
        - Replaces values with "***MASKED***"
        - Uses word boundary matching to avoid false positives
    """
    sensitive_fields = {"password", "api_key", "token", "secret", "credential", "auth"}

    for key in list(event_dict.keys()):
        key_lower = key.lower()
        # Exact match or a match separated by underscore/hyphen
        for sensitive in sensitive_fields:
            if (
                key_lower == sensitive
                or key_lower.endswith(f"_{sensitive}")
                or key_lower.endswith(f"-{sensitive}")
                or key_lower.startswith(f"{sensitive}_")
                or key_lower.startswith(f"{sensitive}-")
            ):
                event_dict[key] = "***MASKED***"
                break

    return event_dict


def configure_logging(
    log_file: str = "logs/profile-graph.log", log_level: str = "INFO"
) -> None:
    """
    Configure structlog with JSON output and file logging.

    Args:
        log_file: Path to log file (default: "logs/profile-graph.log")
        log_level: Logging level (default: "INFO")

    Log Format (JSON):
        {
            "timestamp": "2025-03-02T10:30:45Z",
            "level": "info",
            "correlation_id": "a1b2c3d4-...",
            "phase": "generation",
            "component": "knowledge_graph_generator",
            "event": "Completion call succeeded",
            "response_length": 2311
        }
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # File and stderr only; stdout carries --json output. Replaces earlier handlers.
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        handlers=[logging.FileHandler(log_file), logging.StreamHandler(sys.stderr)],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_credentials,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(
    correlation_id: Optional[str] = None,
    phase: Optional[str] = None,
    component: Optional[str] = None,
) -> BindableLogger:
    """
    Get structured logger with bound context.

    Args:
        correlation_id: Correlation ID for request tracing (generates UUID if not provided)
        phase: Pipeline phase (e.g., "scraping", "generation")
        component: Component name (e.g., "text_fetcher", "reconciler")

    Returns:
        BoundLogger with correlation_id, phase, and component bound to context
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    logger = structlog.get_logger()

    if correlation_id:
        logger = logger.bind(correlation_id=correlation_id)
    if phase:
        logger = logger.bind(phase=phase)
    if component:
        logger = logger.bind(component=component)

    return logger
