import pytest
from pydantic import ValidationError

from app.core.config import RESUME_MIME_TYPES, Settings


def test_defaults_match_gmail_relay():
    config = Settings(_env_file=None, SMTP_USER="relay@service.test")

    assert config.SMTP_HOST == "smtp.gmail.com"
    assert config.SMTP_PORT == 587
    assert config.SMTP_SECURITY == "starttls"
    assert config.MAX_RESUME_BYTES == 4 * 1024 * 1024
    assert config.ALLOWED_RESUME_TYPES == RESUME_MIME_TYPES
    assert config.API_PREFIX == "/api"


def test_security_mode_is_normalised():
    assert Settings(_env_file=None, SMTP_SECURITY=" SSL ").SMTP_SECURITY == "ssl"


def test_unknown_security_mode_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SMTP_SECURITY="tls1.3")


def test_local_origins_default():
    config = Settings(_env_file=None, ENVIRONMENT="local")
    assert config.ALLOWED_ORIGINS == ["http://localhost:3000"]


def test_production_requires_smtp_credentials():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENVIRONMENT="production", SMTP_USER=None, SMTP_PASSWORD=None)

    config = Settings(
        _env_file=None,
        ENVIRONMENT="production",
        SMTP_USER="relay@service.test",
        SMTP_PASSWORD="app-password",
        ALLOWED_ORIGINS=["https://frontend.example.com"],
    )
    assert config.SMTP_PASSWORD.get_secret_value() == "app-password"
    assert config.ALLOWED_ORIGINS == ["https://frontend.example.com"]


def test_startup_verification_requires_sender_account():
    with pytest.raises(ValidationError, match="SMTP_USER"):
        Settings(_env_file=None, SMTP_VERIFY_ON_STARTUP=True, SMTP_USER=None)

    config = Settings(_env_file=None, SMTP_VERIFY_ON_STARTUP=False, SMTP_USER=None)
    assert config.SMTP_USER is None
