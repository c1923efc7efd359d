"""
Shared pytest fixtures for waiver_service tests.
"""

import json

import httpx
import pytest
import structlog
from fastapi.testclient import TestClient

from waiver_service.config import Settings, get_settings
from waiver_service.core.models import WaiverSubmission
from waiver_service.main import app
from waiver_service.routers.waiver import get_resend_client
from waiver_service.services.resend import ResendClient

ADMIN_EMAIL = "admin@southernmammoth.org"
OWNER_EMAIL = "owner@hatcherfarm.com"


@pytest.fixture
def valid_payload() -> dict:
    """A complete waiver body as sent by the public form."""
    return {
        "cave": "Bear Den Cave",
        "participantName": "Jane Caver",
        "email": "jane.caver@example.com",
        "phone": "615-555-0100",
        "address": "12 Sinkhole Rd",
        "cityStateZip": "Monteagle, TN 37356",
        "birthDate": "1990-05-15",
        "tripDate": "2026-11-07",
        "emergency1Name": "John Caver",
        "emergency1Phone": "615-555-0101",
        "emergency1Relationship": "Brother",
        "wnsAcknowledge": True,
        "risksAcknowledge": True,
        "rulesAcknowledge": True,
        "liabilityAcknowledge": True,
        "signature": "  jane caver ",
        "submittedAt": "2026-10-19T15:04:05.000Z",
    }


@pytest.fixture
def submission(valid_payload) -> WaiverSubmission:
    """WaiverSubmission built from the valid payload."""
    return WaiverSubmission.from_dict(valid_payload)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the test runner's environment."""
    return Settings(
        _env_file=None,
        resend_api_key="re_test_key",
        resend_api_url="https://api.resend.test/emails",
        admin_email=ADMIN_EMAIL,
        property_owner_email=OWNER_EMAIL,
        protected_site_marker="Hatcher",
        display_timezone="UTC",
        escape_html=False,
    )


class FakeResend:
    """Stands in for the Resend API behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.fail_for: set[str] = set()
        self.unreachable_for: set[str] = set()
        self.log_contexts: list[dict] = []

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.log_contexts.append(structlog.contextvars.get_contextvars())
        payload = json.loads(request.content)
        if payload["to"][0] in self.unreachable_for:
            raise httpx.ConnectError("connection refused", request=request)
        if payload["to"][0] in self.fail_for:
            return httpx.Response(422, text='{"message": "Invalid `to` field"}')
        return httpx.Response(200, json={"id": f"email-{len(self.requests)}"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_resend() -> FakeResend:
    """Fake Resend endpoint recording every request."""
    return FakeResend()


@pytest.fixture
def client(settings, fake_resend):
    """TestClient wired to the test settings and the fake Resend endpoint."""

    async def resend_override():
        async with httpx.AsyncClient(transport=fake_resend.transport()) as http:
            yield ResendClient(api_url=settings.resend_api_url, client=http)

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_resend_client] = resend_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
