"""
Public form endpoints: contact message and career application.

Each request runs validate -> compose -> dispatch -> respond, with a
validation failure short-circuiting straight to a 400.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    Form,
    UploadFile,
    status,
)
from fastapi.responses import JSONResponse

from app.api.deps import get_dispatcher, get_upload_store
from app.schemas.forms import (
    ContactForm,
    DeliveryErrorResponse,
    ErrorResponse,
    MessageResponse,
)
from app.services.composer import compose_career, compose_contact
from app.services.dispatcher import DispatchOutcome, Dispatcher, Failed
from app.services.upload_service import UploadRejected, UploadStore
from app.services.validation import (
    SubmissionError,
    validate_career,
    validate_contact,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_SENT = "Email sent successfully"
CONTACT_FAILED = "Failed to send email"
CAREER_SENT = "Application sent successfully"
CAREER_FAILED = "Failed to send application"

FORM_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": DeliveryErrorResponse},
}


def reject(error: SubmissionError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=error.message).model_dump(),
    )


def respond(
    outcome: DispatchOutcome, success_message: str, failure_message: str
) -> JSONResponse:
    """Map a dispatch outcome to the HTTP response returned to the form."""
    if isinstance(outcome, Failed):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=DeliveryErrorResponse(
                error=failure_message, details=outcome.reason
            ).model_dump(),
        )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=MessageResponse(message=success_message).model_dump(),
    )


@router.post(
    "/send-email",
    response_model=MessageResponse,
    responses=FORM_RESPONSES,
    summary="Send a contact message",
)
async def send_email(
    form: ContactForm,
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    try:
        submission = validate_contact(form.model_dump())
    except SubmissionError as exc:
        logger.warning("Contact form rejected: %s (field=%s)", exc.message, exc.field)
        return reject(exc)

    message = compose_contact(submission, sender_address=dispatcher.sender_address)
    outcome = await dispatcher.dispatch(message)
    return respond(outcome, CONTACT_SENT, CONTACT_FAILED)


@router.post(
    "/send-career-application",
    response_model=MessageResponse,
    responses=FORM_RESPONSES,
    summary="Send a career application with resume",
)
async def send_career_application(
    background_tasks: BackgroundTasks,
    job_type: Optional[str] = Form(None, alias="jobType"),
    position: Optional[str] = Form(None),
    full_name: Optional[str] = Form(None, alias="fullName"),
    phone: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    qualification: Optional[str] = Form(None),
    degree: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    about: Optional[str] = Form(None),
    to_email: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    uploads: UploadStore = Depends(get_upload_store),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    resume_status = "missing"
    try:
        stored_resume = await uploads.save_resume(resume)
    except UploadRejected as exc:
        # A refused file counts as a missing resume
        stored_resume = None
        resume_status = f"refused, {exc.reason}"
    if stored_resume is not None:
        resume_status = "stored"
        # Runs after the response has been sent
        background_tasks.add_task(uploads.discard, stored_resume.storage_path)

    fields = {
        "jobType": job_type,
        "position": position,
        "fullName": full_name,
        "phone": phone,
        "email": email,
        "qualification": qualification,
        "degree": degree,
        "experience": experience,
        "about": about,
        "to_email": to_email,
    }
    try:
        submission = validate_career(fields, stored_resume)
    except SubmissionError as exc:
        logger.warning(
            "Career application rejected: %s (field=%s, resume=%s)",
            exc.message,
            exc.field,
            resume_status,
        )
        return reject(exc)

    message = compose_career(submission, sender_address=dispatcher.sender_address)
    outcome = await dispatcher.dispatch(message)
    return respond(outcome, CAREER_SENT, CAREER_FAILED)
