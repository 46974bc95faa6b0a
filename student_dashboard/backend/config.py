import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _split_emails(raw: str) -> Tuple[str, ...]:
    return tuple(e.strip() for e in raw.split(",") if e.strip())


def _as_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _as_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    api_url: str = ""
    api_key: str = ""
    allowed_emails: Tuple[str, ...] = field(default_factory=tuple)
    google_client_id: str = ""
    verify_id_token: bool = True
    api_timeout: Optional[float] = None
    feedback_ttl_seconds: float = 3.0
    session_cookie: str = "user_email"
    session_secret: str = ""
    cookie_secure: bool = False
    cookie_max_age: int = 60 * 60 * 24 * 365
    app_name: str = "Student Dashboard"
    app_version: str = "0.1.0"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=os.getenv("API_URL", ""),
            api_key=os.getenv("API_KEY", ""),
            allowed_emails=_split_emails(os.getenv("ALLOWED_EMAILS", "")),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID", ""),
            verify_id_token=_as_bool(os.getenv("VERIFY_ID_TOKEN"), True),
            api_timeout=_as_float(os.getenv("API_TIMEOUT")),
            feedback_ttl_seconds=float(os.getenv("FEEDBACK_TTL_SECONDS", "3")),
            session_cookie=os.getenv("SESSION_COOKIE", "user_email"),
            session_secret=os.getenv("SESSION_SECRET", ""),
            cookie_secure=_as_bool(os.getenv("COOKIE_SECURE"), False),
            app_name=os.getenv("APP_NAME", "Student Dashboard"),
            app_version=os.getenv("APP_VERSION", "0.1.0"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
