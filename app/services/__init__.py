"""
Form relay services.

Services:
    - validation: raw form fields -> typed submissions
    - composer: submissions -> outbound messages
    - dispatcher: outbound messages -> one SMTP delivery attempt
    - upload_service: temporary storage for uploaded resumes
"""

from .composer import OutboundAttachment, OutboundMessage, compose_career, compose_contact
from .dispatcher import Dispatcher, DispatchOutcome, Failed, Sent
from .upload_service import ResumeUpload, UploadRejected, UploadStore
from .validation import (
    CareerSubmission,
    ContactSubmission,
    SubmissionError,
    validate_career,
    validate_contact,
)

__all__ = [
    "CareerSubmission",
    "ContactSubmission",
    "DispatchOutcome",
    "Dispatcher",
    "Failed",
    "OutboundAttachment",
    "OutboundMessage",
    "ResumeUpload",
    "Sent",
    "SubmissionError",
    "UploadRejected",
    "UploadStore",
    "compose_career",
    "compose_contact",
    "validate_career",
    "validate_contact",
]
