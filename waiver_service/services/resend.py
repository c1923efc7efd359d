"""
Resend API client for transactional email.

Sends one rendered email per call; there are no retries, a rejected send
is final for the request.
"""

from typing import Any

import httpx

from waiver_service.config import Settings
from waiver_service.core.logging import get_logger
from waiver_service.core.models import EmailMessage

log = get_logger(__name__)


class EmailSendError(Exception):
    """Raised when Resend rejects an email."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Resend API error: {detail}")
        self.status_code = status_code
        self.detail = detail


class ResendClient:
    """Async HTTP client for the Resend send endpoint."""

    def __init__(
        self,
        api_url: str = "https://api.resend.com/emails",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResendClient":
        return cls(api_url=settings.resend_api_url, timeout=settings.http_timeout_seconds)

    async def __aenter__(self) -> "ResendClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance opened it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def send_email(self, api_key: str, message: EmailMessage) -> dict[str, Any]:
        """
        Send a single email through Resend.

        Args:
            api_key: Resend API key
            message: Rendered email

        Returns:
            Parsed JSON response from Resend (contains the email id)

        Raises:
            EmailSendError: on any non-2xx response, with the body text as detail
            RuntimeError: if no HTTP client is open
        """
        if self._client is None:
            raise RuntimeError("ResendClient must be used as an async context manager or given a client")

        response = await self._client.post(
            self.api_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=message.to_payload(),
        )

        if not response.is_success:
            log.warning(
                "resend_email_rejected",
                status=response.status_code,
                to=message.to,
                subject=message.subject,
            )
            raise EmailSendError(response.status_code, response.text)

        data = response.json()
        email_id = data.get("id") if isinstance(data, dict) else None
        log.info("resend_email_sent", to=message.to, email_id=email_id)
        return data
