from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "outreach"
    SITE_URL: str = "http://localhost:3000"

    ADMIN_JWT_TTL_MINUTES: int = 240
    ADMIN_JWT_SECRET: str = "change_me_admin"
    # Comma-separated allowlist; empty means any active admin user may sign in.
    ADMIN_EMAILS: str = ""
    ADMIN_BOOTSTRAP_ENABLED: bool = True
    ADMIN_BOOTSTRAP_EMAIL: str = "admin@example.com"
    ADMIN_BOOTSTRAP_PASSWORD: str = "admin123"
    ADMIN_BOOTSTRAP_NAME: str = "Site Administrator"

    CORS_ORIGINS: str = "http://localhost:3000"

    DATABASE_URL: str
    REDIS_URL: str = "redis://localhost:6379/0"

    EMAIL_PROVIDER: str = "dummy"  # dummy | smtp | service
    EMAIL_SERVICE_URL: str = "http://email-service:8010"
    INTERNAL_SERVICE_TOKEN: str = "change_me_internal_service_token"
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False
    FROM_EMAIL: str = "noreply@example.org"
    ADMIN_NOTIFICATION_EMAILS: str = ""
    ORGANIZATION_NAME: str = "AdaptToLife"

    PUBLIC_SUBMIT_RATE_LIMIT: int = 20
    PUBLIC_SUBMIT_RATE_WINDOW_SECONDS: int = 300

    # Lock the event row while counting registrations. Needs SELECT ... FOR UPDATE support.
    REGISTRATION_STRICT_CAPACITY: bool = False

    # Compose/infra vars that may exist in shared .env
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "outreach"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def admin_emails_list(self) -> List[str]:
        return [e.strip().lower() for e in self.ADMIN_EMAILS.split(",") if e.strip()]

    @property
    def admin_notification_emails_list(self) -> List[str]:
        return [e.strip() for e in self.ADMIN_NOTIFICATION_EMAILS.split(",") if e.strip()]

settings = Settings()
