from typing import List, Optional

from pydantic import (
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

SMTP_SECURITY_MODES = ("starttls", "ssl", "none")

RESUME_MIME_TYPES = [
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]


class Settings(BaseSettings):
    PROJECT_NAME: str = "Form Relay"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # Also write JSON logs here when set

    # --- Outbound mail (SMTP relay) ---
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_SECURITY: str = Field(
        default="starttls",
        description="Connection security: starttls, ssl or none.",
    )
    SMTP_USER: Optional[str] = None  # Outbound account, also used as sender address
    SMTP_PASSWORD: Optional[SecretStr] = None
    SMTP_TIMEOUT: float = 30.0
    SMTP_VERIFY_ON_STARTUP: bool = True

    # --- Uploads ---
    UPLOAD_DIR: str = "uploads"
    MAX_RESUME_BYTES: int = 4 * 1024 * 1024  # 4MB
    ALLOWED_RESUME_TYPES: List[str] = Field(
        default_factory=lambda: list(RESUME_MIME_TYPES)
    )

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        validate_default=True,
        description="List of allowed CORS origins. Configure in .env",
    )

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "production":
            if v is None:
                return ["http://localhost:3000"]
            if isinstance(v, str) and v.strip() in ("", "[]"):
                return ["http://localhost:3000"]
            if isinstance(v, list) and len(v) == 0:
                return ["http://localhost:3000"]
        return v

    @field_validator("SMTP_SECURITY", mode="after")
    @classmethod
    def validate_smtp_security(cls, v: str) -> str:
        mode = v.strip().lower()
        if mode not in SMTP_SECURITY_MODES:
            raise ValueError(
                f"SMTP_SECURITY must be one of {', '.join(SMTP_SECURITY_MODES)}"
            )
        return mode

    @model_validator(mode="after")
    def require_smtp_credentials(self) -> "Settings":
        # The relay rejects unauthenticated senders outside local setups
        if self.ENVIRONMENT == "production" and not (
            self.SMTP_USER and self.SMTP_PASSWORD
        ):
            raise ValueError(
                "SMTP_USER and SMTP_PASSWORD must be set for production deployments"
            )
        # Every message is sent from SMTP_USER
        if self.SMTP_VERIFY_ON_STARTUP and not self.SMTP_USER:
            raise ValueError("SMTP_USER must be set when SMTP_VERIFY_ON_STARTUP is enabled")
        return self


settings = Settings()
