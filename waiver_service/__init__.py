"""
Cave waiver submission service.

A small FastAPI service that:
- Validates waiver submissions from the public waiver form
- Routes owner notifications for caves that need property owner approval
- Sends a participant confirmation and an owner/admin notification via Resend
"""

__version__ = "1.0.0"
