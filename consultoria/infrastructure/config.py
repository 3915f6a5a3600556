from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_UPLOAD_DIR = Path(__file__).parent.parent.parent / "uploads"


@dataclass(frozen=True)
class Settings:
    upload_dir: Path
    public_base_url: str
    whatsapp_number: str
    resend_api_key: str
    email_from: str
    recipient_email: str
    cc_email: str
    link_max_downloads: int
    link_ttl_hours: int
    link_sweep_interval_seconds: int
    cnpj_timeout_seconds: float
    rate_limit_per_minute: int
    admin_api_key: str
    cors_origins: tuple[str, ...]
    debug: bool
    port: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    origins = os.environ.get("CORS_ORIGINS", "http://localhost:3000")
    return Settings(
        upload_dir=Path(os.environ.get("UPLOAD_DIR", str(_DEFAULT_UPLOAD_DIR))),
        public_base_url=os.environ.get("PUBLIC_BASE_URL", "http://localhost:10000").rstrip("/"),
        whatsapp_number=os.environ.get("WHATSAPP_NUMBER", "5592999889392"),
        resend_api_key=os.environ.get("RESEND_API_KEY", ""),
        email_from=os.environ.get("EMAIL_FROM", "contato@aportecapitalcred.com.br"),
        recipient_email=os.environ.get("RECIPIENT_EMAIL", "contato@aportecapitalcred.com.br"),
        cc_email=os.environ.get("CC_EMAIL", ""),
        link_max_downloads=int(os.environ.get("LINK_MAX_DOWNLOADS", "5")),
        link_ttl_hours=int(os.environ.get("LINK_TTL_HOURS", "48")),
        link_sweep_interval_seconds=int(os.environ.get("LINK_SWEEP_INTERVAL_SECONDS", "3600")),
        cnpj_timeout_seconds=float(os.environ.get("CNPJ_TIMEOUT_SECONDS", "10")),
        rate_limit_per_minute=int(os.environ.get("API_RATE_LIMIT_PER_MINUTE", "60")),
        admin_api_key=os.environ.get("ADMIN_API_KEY", ""),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        port=int(os.environ.get("PORT", "10000")),
    )
