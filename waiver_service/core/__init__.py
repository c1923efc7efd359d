"""Core modules for waiver processing."""

from .logging import configure_logging, get_logger
from .models import EmailMessage, Routing, WaiverSubmission
from .validation import (
    REQUIRED_FIELDS,
    SubmissionValidationError,
    validate_submission,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "EmailMessage",
    "Routing",
    "WaiverSubmission",
    "REQUIRED_FIELDS",
    "SubmissionValidationError",
    "validate_submission",
]
