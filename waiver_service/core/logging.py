"""
Structured logging for the waiver service using structlog.

Every submission gets a short request id bound into structlog's context
variables, together with the cave and recipient once they are known, so
each log line of one submission (including both Resend sends) can be
correlated.
"""

import logging
import sys
import uuid

import structlog

SERVICE_NAME = "waiver_service"


def _add_service(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR; unknown values mean INFO
        json_output: JSON lines for production, colored console output otherwise
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, usually with the calling module's ``__name__``."""
    return structlog.get_logger(name)


def start_submission_context() -> str:
    """Reset the log context for a new submission and bind a fresh request id."""
    request_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    return request_id


def bind_submission_context(**fields) -> None:
    """Add fields (cave, recipient, ...) to the current submission's log context."""
    structlog.contextvars.bind_contextvars(**fields)


def end_submission_context() -> None:
    structlog.contextvars.clear_contextvars()
