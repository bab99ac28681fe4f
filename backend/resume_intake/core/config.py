"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # ── Database ──────────────────────────────
    POSTGRES_USER: str = "hv_user"
    POSTGRES_PASSWORD: str = "hv_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "hojas_vida"

    @property
    def DATABASE_URL(self) -> str:
        """Async URL for app runtime (asyncpg)."""
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    DB_ECHO: bool = False

    # ── Redis / Celery ────────────────────────
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/1"

    # ── Object Storage (GCS) ──────────────────
    GCS_BUCKET: str = "hojas_vida_logyser"
    GOOGLE_CLOUD_PROJECT: str = ""
    STORAGE_PUBLIC_HOST: str = "storage.googleapis.com"
    SIGNED_URL_EXPIRES_MS: int = 7 * 24 * 60 * 60 * 1000

    # ── PDF rendering ─────────────────────────
    DEFAULT_LOGO_URL: str = "https://storage.googleapis.com/logyser-recibo-public/logo.png"
    PDF_TEMPLATE_PATH: str = str(PACKAGE_DIR / "templates" / "cv_template.html")
    PDF_KEY_PREFIX: str = "hoja_vida"
    PDF_PAGE_FORMAT: str = "A4"
    PDF_MARGIN: str = "12mm"
    PDF_VIEWPORT_WIDTH: int = 1200
    PDF_VIEWPORT_HEIGHT: int = 800
    PDF_TIMEOUT_MS: int = 60_000
    PDF_SETTLE_DELAY_MS: int = 5_000
    PDF_WAIT_FOR_IMAGES: bool = True
    PDF_RENDER_MAX_ATTEMPTS: int = 2
    PDF_RETRY_BACKOFF_SECONDS: float = 1.0
    BROWSER_NO_SANDBOX: bool = True

    # ── Uploads ───────────────────────────────
    PHOTO_MAX_BYTES: int = 5 * 1024 * 1024

    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = ""

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
