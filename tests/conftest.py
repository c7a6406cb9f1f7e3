import os

# Settings are read at import time; keep tests off the network
os.environ.setdefault("SMTP_VERIFY_ON_STARTUP", "false")
os.environ.setdefault("SMTP_USER", "relay@service.test")
os.environ.setdefault("SMTP_PASSWORD", "app-password")
os.environ.setdefault("ENVIRONMENT", "testing")

from email.message import EmailMessage
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_mail_transport
from app.core.config import settings
from app.main import app


class FakeTransport:
    """Records outgoing messages instead of talking to an SMTP relay."""

    sender_address = "relay@service.test"

    def __init__(self, errors: Optional[List[Exception]] = None):
        self.sent: List[EmailMessage] = []
        self.attempts = 0
        self._errors = list(errors or [])

    async def send(self, message: EmailMessage) -> None:
        self.attempts += 1
        if self._errors:
            raise self._errors.pop(0)
        self.sent.append(message)


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def mail_transport():
    return FakeTransport()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path), raising=False)
    return path


@pytest.fixture(scope="function")
def client(mail_transport, upload_dir):
    """
    TestClient with the mail transport replaced by FakeTransport.
    """
    app.dependency_overrides[get_mail_transport] = lambda: mail_transport

    # Using 'with' context manager to trigger lifespan events (startup/shutdown)
    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
