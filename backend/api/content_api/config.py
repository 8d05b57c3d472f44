from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Only used when APP_ENV=dev is set explicitly.
DEV_JWT_SECRET = "dev-secret-unsafe"


def _load_env_once() -> None:
    """First existing of ENV_PATH, backend/api/.env, ./.env; real env wins."""
    env_path = os.getenv("ENV_PATH")
    if env_path:
        p = Path(env_path)
        if p.exists():
            load_dotenv(p, override=False)
            return

    # this file is backend/api/content_api/config.py
    backend_api_dir = Path(__file__).resolve().parents[1]
    p2 = backend_api_dir / ".env"
    if p2.exists():
        load_dotenv(p2, override=False)
        return

    p3 = Path.cwd() / ".env"
    if p3.exists():
        load_dotenv(p3, override=False)


def _tried_env_files() -> str:
    backend_api_dir = Path(__file__).resolve().parents[1]
    tried = [
        f"ENV_PATH={os.getenv('ENV_PATH')}",
        str(backend_api_dir / ".env"),
        str(Path.cwd() / ".env"),
    ]
    return ", ".join(tried)


def _split_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _jwt_secret_from_env() -> str:
    secret = os.getenv("JWT_SECRET")
    if secret:
        return secret
    if (os.getenv("APP_ENV") or "").lower() == "dev":
        logger.warning("JWT_SECRET is not set; APP_ENV=dev, using the development secret")
        return DEV_JWT_SECRET
    raise RuntimeError(
        "JWT_SECRET is not set. Ensure it exists in backend/api/.env or set ENV_PATH "
        "(APP_ENV=dev allows the development secret).\n"
        f"Tried: {_tried_env_files()}"
    )


@dataclass
class Settings:
    database_url: str | None = None
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None
    jwt_issuer: str | None = None
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        _load_env_once()
        return cls(
            database_url=os.getenv("DATABASE_URL") or os.getenv("DB_URL"),
            jwt_secret=_jwt_secret_from_env(),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_audience=os.getenv("JWT_AUDIENCE") or None,
            jwt_issuer=os.getenv("JWT_ISSUER") or None,
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS")) or ["http://localhost:3000"],
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )

    def require_database_url(self) -> str:
        if not self.database_url:
            raise RuntimeError(
                "DATABASE_URL is not set. Ensure it exists in backend/api/.env or set ENV_PATH.\n"
                f"Tried: {_tried_env_files()}"
            )
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
