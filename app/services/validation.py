"""
Validation of raw form fields into typed submissions.

Both validators are pure: they read the mapping they are given and either
return a frozen submission or raise ``SubmissionError`` carrying the
message shown to the caller.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from app.services.upload_service import ResumeUpload

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"\+?\d{10,15}", re.ASCII)

CONTACT_FIELDS = ("name", "email", "subject", "message", "to_email")
CAREER_FIELDS = (
    "jobType",
    "position",
    "fullName",
    "phone",
    "email",
    "qualification",
    "degree",
    "experience",
    "about",
    "to_email",
)

MISSING_CONTACT_FIELDS = "All fields are required"
MISSING_CAREER_FIELDS = "All fields and resume are required"
INVALID_EMAIL = "Invalid email address"
INVALID_RECIPIENT = "Invalid recipient email address"
INVALID_PHONE = "Invalid phone number"


class SubmissionError(ValueError):
    """Client input rejected before any message is composed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    subject: str
    message: str
    recipient_address: str


@dataclass(frozen=True)
class CareerSubmission:
    job_type: str
    position: str
    full_name: str
    phone: str
    email: str
    qualification: str
    degree: str
    experience: str
    about: str
    recipient_address: str
    resume: ResumeUpload


def is_valid_email(value: str) -> bool:
    # Addresses end up in To and Reply-To headers
    if "\r" in value or "\n" in value:
        return False
    return bool(EMAIL_PATTERN.search(value))


def is_valid_phone(value: str) -> bool:
    return PHONE_PATTERN.fullmatch(value.strip()) is not None


def _missing_fields(fields: Mapping[str, Optional[str]], names) -> list[str]:
    missing = []
    for name in names:
        value = fields.get(name)
        if not isinstance(value, str) or not value.strip():
            missing.append(name)
    return missing


def _check_addresses(fields: Mapping[str, Optional[str]]) -> None:
    if not is_valid_email(fields["email"]):
        raise SubmissionError(INVALID_EMAIL, field="email")
    if not is_valid_email(fields["to_email"]):
        raise SubmissionError(INVALID_RECIPIENT, field="to_email")


def validate_contact(fields: Mapping[str, Optional[str]]) -> ContactSubmission:
    missing = _missing_fields(fields, CONTACT_FIELDS)
    if missing:
        raise SubmissionError(MISSING_CONTACT_FIELDS, field=missing[0])

    _check_addresses(fields)

    return ContactSubmission(
        name=fields["name"],
        email=fields["email"],
        subject=fields["subject"],
        message=fields["message"],
        recipient_address=fields["to_email"],
    )


def validate_career(
    fields: Mapping[str, Optional[str]], resume: Optional[ResumeUpload]
) -> CareerSubmission:
    """Validate a job application.

    ``resume`` is None both when no file was sent and when the upload stage
    refused the file (type or size); either way the application is rejected
    with the same message.
    """
    missing = _missing_fields(fields, CAREER_FIELDS)
    if resume is None:
        missing.append("resume")
    if missing:
        raise SubmissionError(MISSING_CAREER_FIELDS, field=missing[0])

    _check_addresses(fields)

    if not is_valid_phone(fields["phone"]):
        raise SubmissionError(INVALID_PHONE, field="phone")

    return CareerSubmission(
        job_type=fields["jobType"],
        position=fields["position"],
        full_name=fields["fullName"],
        phone=fields["phone"],
        email=fields["email"],
        qualification=fields["qualification"],
        degree=fields["degree"],
        experience=fields["experience"],
        about=fields["about"],
        recipient_address=fields["to_email"],
        resume=resume,
    )
