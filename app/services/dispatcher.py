"""
Delivery of composed messages.

The dispatcher renders an ``OutboundMessage`` into a MIME message (plain
text, an HTML alternative and any attachments read through the opener) and
makes exactly one send attempt through the mail transport. Every failure
while rendering or sending is reported as ``Failed(reason)``; nothing is
raised to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import BinaryIO, Protocol, Union

from app.services.composer import OutboundMessage

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    @property
    def sender_address(self) -> str: ...

    async def send(self, message: EmailMessage) -> None: ...


class AttachmentOpener(Protocol):
    def open(self, path) -> BinaryIO: ...


@dataclass(frozen=True)
class Sent:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str


DispatchOutcome = Union[Sent, Failed]


def build_email_message(
    message: OutboundMessage, opener: AttachmentOpener
) -> EmailMessage:
    """Render an outbound message as a MIME message, reading attachments once."""
    msg = EmailMessage()
    msg["From"] = formataddr((message.sender_display, message.sender_address))
    msg["To"] = message.recipient_address
    msg["Reply-To"] = message.reply_to
    msg["Subject"] = message.subject

    msg.set_content(message.plain_text_body)
    msg.add_alternative(message.html_body, subtype="html")

    for attachment in message.attachments:
        maintype, subtype = ("application", "octet-stream")
        if "/" in attachment.content_type:
            maintype, subtype = attachment.content_type.split("/", 1)
        with opener.open(attachment.content_ref) as stream:
            content = stream.read()
        msg.add_attachment(
            content,
            maintype=maintype,
            subtype=subtype,
            filename=attachment.filename,
        )

    return msg


class Dispatcher:
    """Hands one composed message to the mail transport, exactly once."""

    def __init__(self, transport: MailTransport, opener: AttachmentOpener):
        self.transport = transport
        self.opener = opener

    @property
    def sender_address(self) -> str:
        return self.transport.sender_address

    async def dispatch(self, message: OutboundMessage) -> DispatchOutcome:
        try:
            email_message = build_email_message(message, self.opener)
            await self.transport.send(email_message)
        except Exception as exc:
            logger.error(
                "Email delivery failed to=%s error=%s",
                message.recipient_address,
                exc,
                exc_info=True,
            )
            return Failed(reason=str(exc))

        logger.info(
            "Email sent to=%s attachments=%s",
            message.recipient_address,
            len(message.attachments),
        )
        return Sent()
