"""
Validation of incoming waiver form bodies.
"""

from typing import Any

from waiver_service.core.models import WaiverSubmission

REQUIRED_FIELDS = [
    "cave",
    "participantName",
    "email",
    "phone",
    "address",
    "birthDate",
    "tripDate",
    "emergency1Name",
    "emergency1Phone",
    "signature",
]

SIGNATURE_MISMATCH_MESSAGE = "Signature must match your full name exactly"


class SubmissionValidationError(Exception):
    """Raised when a waiver body fails validation; the message is client-safe."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.missing_fields = missing_fields or []


def find_missing_fields(data: dict[str, Any]) -> list[str]:
    """Return required fields that are absent or falsy, in declared order."""
    return [name for name in REQUIRED_FIELDS if not data.get(name)]


def _normalize_name(value: Any) -> str:
    return str(value).strip().lower()


def validate_submission(data: Any) -> WaiverSubmission:
    """
    Validate a decoded JSON body and build a WaiverSubmission.

    Presence of every required field is checked first and all missing names
    are reported together. The signature check only runs once presence passes.

    Raises:
        SubmissionValidationError: if a required field is missing or the
            signature does not match the participant name.
    """
    if not isinstance(data, dict):
        data = {}

    missing = find_missing_fields(data)
    if missing:
        raise SubmissionValidationError(
            f"Missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )

    if _normalize_name(data["signature"]) != _normalize_name(data["participantName"]):
        raise SubmissionValidationError(SIGNATURE_MISMATCH_MESSAGE)

    return WaiverSubmission.from_dict(data)
