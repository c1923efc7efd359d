"""
HTML rendering for waiver emails.

Both emails embed the same summary table. Dates are shown the way a US
English browser shows them (``5/15/1990`` and ``5/15/1990, 3:04:05 PM``).
"""

import html
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from waiver_service.config import Settings
from waiver_service.core.models import EmailMessage, Routing, WaiverSubmission

CELL_STYLE = "padding: 12px; border: 1px solid #dee2e6;"
HEADER_STYLE = "text-align: left; padding: 12px; border: 1px solid #dee2e6;"
STRIPE_STYLE = ' style="background: #f8f9fa;"'
STRIPED_ROWS = {
    "Cave",
    "Email",
    "Address",
    "Planned Trip Date",
    "Emergency Contact #2",
    "Electronic Signature",
}

CHECK_MARK = "✓"
CROSS_MARK = "✗"

CONFIRMATION_APPROVAL_NOTICE = (
    "<p><strong>Note:</strong> Your waiver has been sent to the property owner for review. "
    "You will receive confirmation once it has been approved. "
    "Please wait for this confirmation before planning your trip.</p>"
)
ADMIN_APPROVAL_NOTICE = (
    '<p style="background: #fff3cd; padding: 10px; border-left: 4px solid #ffc107;">'
    "<strong>Action Required:</strong> This waiver requires property owner approval. "
    "Please review and contact the participant if needed.</p>"
)


def _zone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def _parse_timestamp(value: str, tz: tzinfo) -> datetime:
    """Parse an ISO date or timestamp into an aware datetime in ``tz``."""
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def format_date(value: str | None, tz_name: str = "UTC") -> str:
    """Format a date value as M/D/YYYY; unparseable values are returned as-is."""
    if not value:
        return ""
    try:
        if len(value) == 10:
            d = date.fromisoformat(value)
        else:
            d = _parse_timestamp(value, _zone(tz_name)).date()
    except (AttributeError, TypeError, ValueError):
        return str(value)
    return f"{d.month}/{d.day}/{d.year}"


def format_datetime(value: str | None, tz_name: str = "UTC") -> str:
    """Format a timestamp as M/D/YYYY, h:MM:SS AM; unparseable values are returned as-is."""
    if not value:
        return ""
    try:
        dt = _parse_timestamp(value, _zone(tz_name))
    except (AttributeError, TypeError, ValueError):
        return str(value)
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


class _Values:
    """Turns submitted values into HTML-ready strings."""

    def __init__(self, escape: bool):
        self.escape = escape

    def __call__(self, value) -> str:
        if value is None:
            return ""
        text = str(value)
        return html.escape(text) if self.escape else text


def _contact_cell(name: str, phone: str, relationship: str) -> str:
    cell = f"{name}<br>{phone}"
    if relationship:
        cell += f"<br>Relationship: {relationship}"
    return cell


def render_summary_table(submission: WaiverSubmission, settings: Settings) -> str:
    """Render the waiver details table shared by both emails."""
    v = _Values(settings.escape_html)
    tz = settings.display_timezone

    address = v(submission.address)
    if submission.city_state_zip:
        address += f"<br>{v(submission.city_state_zip)}"

    rows: list[tuple[str, str, str]] = [
        ("Cave", v(submission.cave), ""),
        ("Full Name", v(submission.participant_name), ""),
        ("Email", v(submission.email), ""),
        ("Phone", v(submission.phone), ""),
        ("Address", address, ""),
        ("Birth Date", v(format_date(submission.birth_date, tz)), ""),
        ("Planned Trip Date", v(format_date(submission.trip_date, tz)), ""),
        (
            "Emergency Contact #1",
            _contact_cell(
                v(submission.emergency1_name),
                v(submission.emergency1_phone),
                v(submission.emergency1_relationship),
            ),
            "",
        ),
    ]
    if submission.emergency2_name:
        rows.append((
            "Emergency Contact #2",
            _contact_cell(
                v(submission.emergency2_name),
                v(submission.emergency2_phone) or "N/A",
                v(submission.emergency2_relationship),
            ),
            "",
        ))

    acknowledgments = "<br>".join(
        f"{CHECK_MARK if accepted else CROSS_MARK} {label}"
        for label, accepted in submission.acknowledgments
    )
    rows.append(("Acknowledgments", acknowledgments, ""))
    rows.append(("Electronic Signature", v(submission.signature), " font-style: italic;"))
    rows.append(("Submission Date/Time", v(format_datetime(submission.submitted_at, tz)), ""))

    lines = ['<table style="width: 100%; border-collapse: collapse; font-family: sans-serif;">']
    for label, cell, extra_style in rows:
        stripe = STRIPE_STYLE if label in STRIPED_ROWS else ""
        lines.append(
            f"<tr{stripe}>"
            f'<th style="{HEADER_STYLE}">{label}</th>'
            f'<td style="{CELL_STYLE}{extra_style}">{cell}</td>'
            "</tr>"
        )
    lines.append("</table>")
    return "\n".join(lines)


def build_confirmation_email(
    submission: WaiverSubmission,
    routing: Routing,
    settings: Settings,
    summary_table: str | None = None,
) -> EmailMessage:
    """Build the confirmation email sent to the participant."""
    v = _Values(settings.escape_html)
    tz = settings.display_timezone
    table = summary_table if summary_table is not None else render_summary_table(submission, settings)
    notice = CONFIRMATION_APPROVAL_NOTICE if routing.requires_approval else ""

    body = f"""
<h2>Waiver Submission Confirmed</h2>
<p>Dear {v(submission.participant_name)},</p>
<p>Thank you for submitting your waiver for <strong>{v(submission.cave)}</strong>.</p>
{notice}
<p><strong>Submitted:</strong> {v(format_datetime(submission.submitted_at, tz))}</p>
<p><strong>Planned Trip Date:</strong> {v(format_date(submission.trip_date, tz))}</p>
<hr>
<h3>Your Waiver Details:</h3>
{table}
<hr>
<p style="color: #666; font-size: 12px;">This is an automated message. Please do not reply to this email.</p>
"""
    return EmailMessage(
        sender=settings.waiver_from_email,
        to=[submission.email],
        subject=f"Waiver Confirmation - {submission.cave}",
        html=body,
    )


def build_admin_email(
    submission: WaiverSubmission,
    routing: Routing,
    settings: Settings,
    summary_table: str | None = None,
) -> EmailMessage:
    """Build the notification sent to the property owner or admin."""
    v = _Values(settings.escape_html)
    tz = settings.display_timezone
    table = summary_table if summary_table is not None else render_summary_table(submission, settings)
    notice = ADMIN_APPROVAL_NOTICE if routing.requires_approval else ""

    body = f"""
<h2>New Waiver Submission</h2>
<p><strong>Cave:</strong> {v(submission.cave)}</p>
<p><strong>Participant:</strong> {v(submission.participant_name)}</p>
<p><strong>Email:</strong> {v(submission.email)}</p>
<p><strong>Phone:</strong> {v(submission.phone)}</p>
<p><strong>Planned Trip Date:</strong> {v(format_date(submission.trip_date, tz))}</p>
<p><strong>Submitted:</strong> {v(format_datetime(submission.submitted_at, tz))}</p>
{notice}
<hr>
<h3>Full Waiver Details:</h3>
{table}
"""
    return EmailMessage(
        sender=settings.waiver_from_email,
        to=[routing.recipient],
        subject=f"New Waiver Submission - {submission.cave} - {submission.participant_name}",
        html=body,
    )


def build_waiver_emails(
    submission: WaiverSubmission,
    routing: Routing,
    settings: Settings,
) -> tuple[EmailMessage, EmailMessage]:
    """Render the participant confirmation and the owner/admin notification."""
    table = render_summary_table(submission, settings)
    return (
        build_confirmation_email(submission, routing, settings, summary_table=table),
        build_admin_email(submission, routing, settings, summary_table=table),
    )
