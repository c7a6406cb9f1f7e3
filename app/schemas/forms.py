from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ContactForm(BaseModel):
    """JSON body of the contact form.

    Fields are optional here so that presence is checked by the validator
    and answered with a 400, not a framework 422.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    to_email: Optional[str] = None


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Email sent successfully"])


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["All fields are required"])


class DeliveryErrorResponse(ErrorResponse):
    details: str = Field(
        ...,
        description="Diagnostic text reported by the mail relay",
        examples=["Connection unexpectedly closed"],
    )
