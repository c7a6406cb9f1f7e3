"""
Composition of outbound messages from validated submissions.

Composition is pure: it only formats the submission into an
``OutboundMessage``. Resume bytes are read later, at dispatch time.
"""
from __future__ import annotations

import html
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from app.services.validation import CareerSubmission, ContactSubmission


@dataclass(frozen=True)
class OutboundAttachment:
    filename: str
    content_ref: Path
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class OutboundMessage:
    sender_display: str
    sender_address: str
    recipient_address: str
    subject: str
    plain_text_body: str
    html_body: str
    reply_to: str
    attachments: Tuple[OutboundAttachment, ...] = ()


def header_value(value: str) -> str:
    """Collapse line breaks so a submitted value fits on one header line."""
    return " ".join(value.splitlines())


def _guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or "application/octet-stream"


def compose_contact(
    submission: ContactSubmission, sender_address: str
) -> OutboundMessage:
    name = html.escape(submission.name)
    email = html.escape(submission.email)
    subject = html.escape(submission.subject)
    message = html.escape(submission.message)

    return OutboundMessage(
        sender_display=header_value(submission.name),
        sender_address=sender_address,
        recipient_address=submission.recipient_address,
        subject=header_value(submission.subject),
        plain_text_body=(
            f"Message from {submission.name} ({submission.email}):\n\n"
            f"{submission.message}"
        ),
        html_body=(
            f"<p><strong>From:</strong> {name} ({email})</p>"
            f"<p><strong>Subject:</strong> {subject}</p>"
            f"<p><strong>Message:</strong></p><p>{message}</p>"
        ),
        reply_to=submission.email,
    )


def _career_fields(submission: CareerSubmission) -> list[tuple[str, str]]:
    return [
        ("Job Type", submission.job_type),
        ("Position", submission.position),
        ("Name", submission.full_name),
        ("Phone", submission.phone),
        ("Email", submission.email),
        ("Qualification", submission.qualification),
        ("Degree", submission.degree),
        ("Experience", submission.experience),
        ("About", submission.about),
    ]


def compose_career(
    submission: CareerSubmission, sender_address: str
) -> OutboundMessage:
    fields = _career_fields(submission)

    text_lines = [f"{label}: {value}" for label, value in fields]
    plain_text_body = "New career application:\n\n" + "\n".join(text_lines)

    # "About" is free text and gets its own paragraph
    html_lines = ["<h3>New Career Application</h3>"]
    for label, value in fields:
        if label == "About":
            html_lines.append(
                f"<p><strong>{label}:</strong></p><p>{html.escape(value)}</p>"
            )
        else:
            html_lines.append(f"<p><strong>{label}:</strong> {html.escape(value)}</p>")

    resume = submission.resume
    attachment = OutboundAttachment(
        filename=resume.original_filename,
        content_ref=resume.storage_path,
        content_type=resume.mime_type or _guess_content_type(resume.original_filename),
    )

    return OutboundMessage(
        sender_display=header_value(submission.full_name),
        sender_address=sender_address,
        recipient_address=submission.recipient_address,
        subject=header_value(
            f"Career Application: {submission.position} ({submission.job_type})"
        ),
        plain_text_body=plain_text_body,
        html_body="\n".join(html_lines),
        reply_to=submission.email,
        attachments=(attachment,),
    )
