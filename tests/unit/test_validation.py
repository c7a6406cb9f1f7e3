"""Tests for form field validation."""
from pathlib import Path

import pytest

from app.services.upload_service import ResumeUpload
from app.services.validation import (
    CareerSubmission,
    ContactSubmission,
    SubmissionError,
    is_valid_email,
    is_valid_phone,
    validate_career,
    validate_contact,
)


def contact_fields(**overrides):
    fields = {
        "name": "Ann",
        "email": "a@b.com",
        "subject": "Hi",
        "message": "Hello",
        "to_email": "x@y.com",
    }
    fields.update(overrides)
    return fields


def career_fields(**overrides):
    fields = {
        "jobType": "Full-time",
        "position": "Backend Engineer",
        "fullName": "Ann Lee",
        "phone": "+15551234567",
        "email": "ann@example.com",
        "qualification": "Bachelor",
        "degree": "Computer Science",
        "experience": "5 years",
        "about": "I build APIs.",
        "to_email": "careers@company.com",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def resume():
    return ResumeUpload(
        original_filename="cv.pdf",
        storage_path=Path("uploads/1700000000000-cv.pdf"),
        mime_type="application/pdf",
        size_bytes=1024,
    )


class TestEmailSyntax:
    @pytest.mark.parametrize(
        "value",
        ["a@b.com", "first.last@sub.domain.org", "x@y.z", "weird!#@host.io", "a@b.c@d"],
    )
    def test_accepts_shape(self, value):
        assert is_valid_email(value)

    @pytest.mark.parametrize(
        "value",
        ["", "plainaddress", "a@b", "@b.com", "a@.com", "a b@c d", "a@b."],
    )
    def test_rejects_shape(self, value):
        assert not is_valid_email(value)

    @pytest.mark.parametrize("value", ["a@b.com\nBcc: c@d.com", "a@b.com\r\n", "\ra@b.com"])
    def test_rejects_line_breaks(self, value):
        assert not is_valid_email(value)

    def test_result_does_not_depend_on_previous_calls(self):
        first = is_valid_email("nope")
        is_valid_email("a@b.com")
        assert is_valid_email("nope") == first


class TestPhoneSyntax:
    @pytest.mark.parametrize(
        "value", ["+15551234567", "5551234567", "123456789012345", "  +15551234567  "]
    )
    def test_accepts(self, value):
        assert is_valid_phone(value)

    @pytest.mark.parametrize(
        "value",
        ["123", "12345678901234567", "+1 555 123 4567", "555-123-4567", "++15551234567", "１２３４５６７８９０"],
    )
    def test_rejects(self, value):
        assert not is_valid_phone(value)


class TestValidateContact:
    def test_valid_submission(self):
        submission = validate_contact(contact_fields())
        assert submission == ContactSubmission(
            name="Ann",
            email="a@b.com",
            subject="Hi",
            message="Hello",
            recipient_address="x@y.com",
        )

    @pytest.mark.parametrize("missing", ["name", "email", "subject", "message", "to_email"])
    def test_missing_field(self, missing):
        fields = contact_fields()
        del fields[missing]
        with pytest.raises(SubmissionError) as exc_info:
            validate_contact(fields)
        assert exc_info.value.message == "All fields are required"
        assert exc_info.value.field == missing

    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_field_counts_as_missing(self, blank):
        with pytest.raises(SubmissionError) as exc_info:
            validate_contact(contact_fields(subject=blank))
        assert exc_info.value.message == "All fields are required"

    def test_invalid_email(self):
        with pytest.raises(SubmissionError) as exc_info:
            validate_contact(contact_fields(email="not-an-email"))
        assert exc_info.value.message == "Invalid email address"

    def test_invalid_recipient(self):
        with pytest.raises(SubmissionError) as exc_info:
            validate_contact(contact_fields(to_email="inbox"))
        assert exc_info.value.message == "Invalid recipient email address"

    def test_presence_is_checked_before_syntax(self):
        with pytest.raises(SubmissionError) as exc_info:
            validate_contact(contact_fields(email="bad", message=""))
        assert exc_info.value.message == "All fields are required"


class TestValidateCareer:
    def test_valid_submission(self, resume):
        submission = validate_career(career_fields(), resume)
        assert isinstance(submission, CareerSubmission)
        assert submission.full_name == "Ann Lee"
        assert submission.job_type == "Full-time"
        assert submission.recipient_address == "careers@company.com"
        assert submission.resume is resume

    def test_missing_resume(self):
        with pytest.raises(SubmissionError) as exc_info:
            validate_career(career_fields(), None)
        assert exc_info.value.message == "All fields and resume are required"
        assert exc_info.value.field == "resume"

    @pytest.mark.parametrize(
        "missing",
        ["jobType", "position", "fullName", "phone", "email", "qualification",
         "degree", "experience", "about", "to_email"],
    )
    def test_missing_field(self, missing, resume):
        with pytest.raises(SubmissionError) as exc_info:
            validate_career(career_fields(**{missing: ""}), resume)
        assert exc_info.value.message == "All fields and resume are required"

    def test_invalid_email(self, resume):
        with pytest.raises(SubmissionError) as exc_info:
            validate_career(career_fields(email="ann.example.com"), resume)
        assert exc_info.value.message == "Invalid email address"

    @pytest.mark.parametrize("phone", ["123", "12345678901234567", "phone"])
    def test_invalid_phone(self, phone, resume):
        with pytest.raises(SubmissionError) as exc_info:
            validate_career(career_fields(phone=phone), resume)
        assert exc_info.value.message == "Invalid phone number"

    def test_email_checked_before_phone(self, resume):
        with pytest.raises(SubmissionError) as exc_info:
            validate_career(career_fields(email="bad", phone="1"), resume)
        assert exc_info.value.message == "Invalid email address"

    def test_phone_with_surrounding_whitespace_is_accepted(self, resume):
        submission = validate_career(career_fields(phone=" 5551234567 "), resume)
        assert submission.phone == " 5551234567 "
