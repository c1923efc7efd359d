"""
Recipient routing for owner/admin notifications.
"""

from waiver_service.config import Settings
from waiver_service.core.models import Routing


def is_protected_site(cave: str, settings: Settings) -> bool:
    """Check if the cave is on the property that requires owner approval."""
    marker = settings.protected_site_marker
    return bool(marker) and marker in (cave or "")


def resolve_routing(cave: str, settings: Settings) -> Routing:
    """
    Pick the recipient of the owner/admin notification.

    Protected-site waivers go to the property owner when an owner address is
    configured; everything else, including protected sites without an owner
    address, goes to the admin address.
    """
    requires_approval = is_protected_site(cave, settings)
    if requires_approval and settings.property_owner_email:
        recipient = settings.property_owner_email
    else:
        recipient = settings.admin_recipient
    return Routing(recipient=recipient, requires_approval=requires_approval)
