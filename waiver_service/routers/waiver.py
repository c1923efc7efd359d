"""
Public waiver submission endpoint.

Receives caving-trip waiver submissions from the public waiver form,
validates them and emails a confirmation to the participant plus a
notification to the property owner or admin.
"""

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from waiver_service.config import Settings, get_settings
from waiver_service.core.logging import (
    bind_submission_context,
    end_submission_context,
    get_logger,
    start_submission_context,
)
from waiver_service.core.validation import SubmissionValidationError, validate_submission
from waiver_service.services.render import build_waiver_emails
from waiver_service.services.resend import ResendClient
from waiver_service.services.routing import resolve_routing

log = get_logger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

SUCCESS_MESSAGE = "Waiver submitted successfully"
NOT_CONFIGURED_ERROR = "Email service not configured. Please contact support."
SEND_FAILED_ERROR = "Failed to send confirmation emails. Please contact support."
PROCESSING_ERROR = "An error occurred while processing your waiver. Please try again."


async def get_resend_client(settings: Settings = Depends(get_settings)):
    """Request-scoped Resend client, closed once the response is ready."""
    async with ResendClient.from_settings(settings) as client:
        yield client


def _json_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


@router.options("/api/submit-waiver")
async def submit_waiver_preflight():
    """CORS preflight; the body is never read."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/api/submit-waiver")
async def submit_waiver(
    request: Request,
    settings: Settings = Depends(get_settings),
    resend: ResendClient = Depends(get_resend_client),
):
    """
    Validate a waiver and send the confirmation and notification emails.

    Both emails are sent concurrently and both are always attempted; if
    either fails the whole submission is reported as failed. Error details
    are logged, never returned.
    """
    received_at = datetime.now(timezone.utc)
    start_submission_context()

    try:
        data = await request.json()

        try:
            submission = validate_submission(data)
        except SubmissionValidationError as e:
            log.info("waiver_validation_failed", error=e.message, missing=e.missing_fields)
            return _json_response(400, {"error": e.message})

        if not settings.resend_api_key:
            log.error("email_service_not_configured", reason="RESEND_API_KEY not configured")
            return _json_response(500, {"error": NOT_CONFIGURED_ERROR})

        if not submission.submitted_at:
            submission.submitted_at = received_at.isoformat()

        routing = resolve_routing(submission.cave, settings)
        bind_submission_context(cave=submission.cave, recipient=routing.recipient)
        log.info(
            "waiver_received",
            participant=submission.participant_name,
            requires_approval=routing.requires_approval,
        )

        messages = build_waiver_emails(submission, routing, settings)
        results = await asyncio.gather(
            *(resend.send_email(settings.resend_api_key, message) for message in messages),
            return_exceptions=True,
        )

        failures = [
            (message, result)
            for message, result in zip(messages, results)
            if isinstance(result, BaseException)
        ]
        if failures:
            for message, error in failures:
                log.error(
                    "waiver_email_failed",
                    to=message.to,
                    subject=message.subject,
                    error=str(error),
                )
            return _json_response(500, {"error": SEND_FAILED_ERROR})

        log.info("waiver_submitted", participant=submission.participant_name)
        return _json_response(200, {"success": True, "message": SUCCESS_MESSAGE})

    except Exception:
        log.exception("waiver_processing_error")
        return _json_response(500, {"error": PROCESSING_ERROR})

    finally:
        end_submission_context()
