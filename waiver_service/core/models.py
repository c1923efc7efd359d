"""
Data models for waiver submissions.

Uses dataclasses for clean, typed data structures. Nothing here is
persisted; every instance lives for a single request.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class WaiverSubmission:
    """A caving-trip liability waiver as submitted by the public form."""

    cave: str
    participant_name: str
    email: str
    phone: str
    address: str
    birth_date: str
    trip_date: str
    emergency1_name: str
    emergency1_phone: str
    signature: str

    city_state_zip: str | None = None
    emergency1_relationship: str | None = None
    emergency2_name: str | None = None
    emergency2_phone: str | None = None
    emergency2_relationship: str | None = None

    wns_acknowledge: bool = False
    risks_acknowledge: bool = False
    rules_acknowledge: bool = False
    liability_acknowledge: bool = False

    submitted_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WaiverSubmission":
        """Create WaiverSubmission from the form's JSON body."""
        return cls(
            cave=data.get("cave"),
            participant_name=data.get("participantName"),
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            birth_date=data.get("birthDate"),
            trip_date=data.get("tripDate"),
            emergency1_name=data.get("emergency1Name"),
            emergency1_phone=data.get("emergency1Phone"),
            signature=data.get("signature"),
            city_state_zip=data.get("cityStateZip"),
            emergency1_relationship=data.get("emergency1Relationship"),
            emergency2_name=data.get("emergency2Name"),
            emergency2_phone=data.get("emergency2Phone"),
            emergency2_relationship=data.get("emergency2Relationship"),
            wns_acknowledge=bool(data.get("wnsAcknowledge")),
            risks_acknowledge=bool(data.get("risksAcknowledge")),
            rules_acknowledge=bool(data.get("rulesAcknowledge")),
            liability_acknowledge=bool(data.get("liabilityAcknowledge")),
            submitted_at=data.get("submittedAt"),
        )

    @property
    def acknowledgments(self) -> list[tuple[str, bool]]:
        """Acknowledgment labels paired with the participant's answers."""
        return [
            ("White-nose Syndrome Prevention", self.wns_acknowledge),
            ("Risks and Hazards", self.risks_acknowledge),
            ("Conservation and Safety Rules", self.rules_acknowledge),
            ("Liability Release", self.liability_acknowledge),
        ]


@dataclass
class Routing:
    """Where the owner/admin notification goes."""

    recipient: str
    requires_approval: bool = False


@dataclass
class EmailMessage:
    """A fully rendered email ready for the provider."""

    sender: str
    to: list[str] = field(default_factory=list)
    subject: str = ""
    html: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Convert to the Resend JSON body."""
        return {
            "from": self.sender,
            "to": list(self.to),
            "subject": self.subject,
            "html": self.html,
        }
