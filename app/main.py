import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.v1 import forms
from app.core.config import settings
from app.core.email import SmtpTransport
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import RequestIdMiddleware

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


tags_metadata = [
    {
        "name": "forms",
        "description": "**Forms** - Contact messages and career applications relayed by email.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    transport = SmtpTransport.from_settings(settings)
    if settings.SMTP_VERIFY_ON_STARTUP:
        # A broken relay must stop the process here, not on the first request
        try:
            transport.verify()
        except Exception as exc:
            logger.error(
                "SMTP connection error host=%s port=%s: %s",
                transport.host,
                transport.port,
                exc,
            )
            raise
    app.state.mail_transport = transport

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Relays contact and career application forms to email over SMTP.",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)

app.include_router(forms.router, prefix=settings.API_PREFIX, tags=["forms"])


@app.get("/", response_class=PlainTextResponse, summary="Liveness")
async def root():
    return (
        f"API is running! Use POST {settings.API_PREFIX}/send-email "
        f"or {settings.API_PREFIX}/send-career-application"
    )


@app.get("/health", summary="Health check")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
