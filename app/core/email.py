from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional

from app.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmtpTransport:
    """Connection settings for the outbound SMTP relay.

    Built once at startup and shared read-only by every request; each send
    opens its own connection.
    """

    host: str
    port: int
    security: str = "starttls"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpTransport":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            security=settings.SMTP_SECURITY,
            username=settings.SMTP_USER,
            password=(
                settings.SMTP_PASSWORD.get_secret_value()
                if settings.SMTP_PASSWORD
                else None
            ),
            timeout=settings.SMTP_TIMEOUT,
        )

    @property
    def sender_address(self) -> str:
        if not self.username:
            raise RuntimeError("SMTP_USER is not configured")
        return self.username

    def _connect(self) -> smtplib.SMTP:
        if self.security == "ssl":
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                self.host,
                self.port,
                timeout=self.timeout,
                context=ssl.create_default_context(),
            )
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            if self.security == "starttls":
                server.starttls(context=ssl.create_default_context())
            if self.username and self.password:
                server.login(self.username, self.password)
        except Exception:
            server.close()
            raise
        return server

    def verify(self) -> None:
        """Connect and authenticate once, raising on any failure."""
        with self._connect() as server:
            server.noop()
        logger.info(
            "SMTP relay ready host=%s port=%s security=%s",
            self.host,
            self.port,
            self.security,
        )

    def _send_sync(self, message: EmailMessage) -> None:
        with self._connect() as server:
            server.send_message(message)

    async def send(self, message: EmailMessage) -> None:
        """Deliver one message, running the blocking SMTP session off the loop."""
        await asyncio.to_thread(self._send_sync, message)
