from fastapi import Depends, Request

from app.core.config import settings
from app.core.email import SmtpTransport
from app.services.dispatcher import Dispatcher
from app.services.upload_service import UploadStore


def get_mail_transport(request: Request) -> SmtpTransport:
    """
    Mail transport dependency.

    The transport is built once in the app lifespan and stored on app.state;
    handlers only read it.
    """
    return request.app.state.mail_transport


def get_upload_store() -> UploadStore:
    return UploadStore(
        upload_dir=settings.UPLOAD_DIR,
        allowed_types=settings.ALLOWED_RESUME_TYPES,
        max_bytes=settings.MAX_RESUME_BYTES,
    )


def get_dispatcher(
    transport: SmtpTransport = Depends(get_mail_transport),
    uploads: UploadStore = Depends(get_upload_store),
) -> Dispatcher:
    return Dispatcher(transport=transport, opener=uploads)
