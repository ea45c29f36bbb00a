import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y"}


@dataclass
class R2Settings:
    account_id: str
    access_key_id: str
    secret_access_key: str
    bucket: str
    public_url: str

    @property
    def endpoint_url(self) -> str:
        return f"https://{self.account_id}.r2.cloudflarestorage.com"


@dataclass
class Settings:
    database_url: str = "sqlite+aiosqlite:///./portfolio.db"
    create_tables: bool = True
    frontend_url: str = "http://localhost:8080"
    firebase_service_account: Optional[str] = None
    firebase_service_account_path: Optional[str] = None
    r2: Optional[R2Settings] = None
    rate_limit_max: int = 1000
    rate_limit_window_seconds: int = 60
    max_body_bytes: int = 10 * 1024 * 1024
    max_upload_bytes: int = 5 * 1024 * 1024
    port: int = 5000
    log_level: str = "INFO"
    seed_on_startup: bool = True
    cors_origins: list[str] = field(default_factory=list)

    def allowed_origins(self) -> list[str]:
        return self.cors_origins or [self.frontend_url]


def get_r2_settings() -> R2Settings:
    account_id = os.getenv("R2_ACCOUNT_ID")
    access_key = os.getenv("R2_ACCESS_KEY_ID")
    secret_key = os.getenv("R2_SECRET_ACCESS_KEY")
    bucket = os.getenv("R2_BUCKET_NAME")
    public_url = os.getenv("R2_PUBLIC_URL")

    if not account_id or not access_key or not secret_key or not bucket or not public_url:
        raise ValueError("Missing Cloudflare R2 environment variables")

    return R2Settings(
        account_id=account_id,
        access_key_id=access_key,
        secret_access_key=secret_key,
        bucket=bucket,
        public_url=public_url.rstrip("/"),
    )


def load_settings() -> Settings:
    """Reads settings from the process environment, after loading `.env` if present."""
    load_dotenv()

    try:
        r2 = get_r2_settings()
    except ValueError:
        r2 = None

    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./portfolio.db"),
        create_tables=_env_bool("DATABASE_CREATE_TABLES", True),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:8080"),
        firebase_service_account=os.getenv("FIREBASE_SERVICE_ACCOUNT"),
        firebase_service_account_path=os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH"),
        r2=r2,
        rate_limit_max=int(os.getenv("RATE_LIMIT_MAX", "1000")),
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
        max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024))),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024))),
        port=int(os.getenv("PORT", "5000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        seed_on_startup=_env_bool("SEED_ON_STARTUP", True),
        cors_origins=[origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()],
    )
