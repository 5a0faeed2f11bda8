from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import dotenv_values

from core.errors import ConfigMissing


DEFAULT_PORT = 3000
REQUIRED_KEYS = ("AWS_REGION", "AWS_CLIENT_ID", "AWS_CLIENT_SECRET", "S3_BUCKET", "S3_FILE")


@dataclass(frozen=True)
class Settings:
    region: str
    access_key_id: str
    secret_access_key: str = field(repr=False)
    bucket: str = ""
    key: str = ""
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)
    endpoint_url: Optional[str] = None


def _read_env(env: Optional[Mapping[str, str]], dotenv_path: Optional[Path]) -> dict:
    if env is not None:
        return dict(env)
    # Real environment wins over .env.
    merged = {k: v for k, v in dotenv_values(dotenv_path or Path.cwd() / ".env").items() if v is not None}
    merged.update(os.environ)
    return merged


def load_settings(env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[Path] = None) -> Settings:
    raw = _read_env(env, dotenv_path)
    values = {k: (raw.get(k) or "").strip() for k in REQUIRED_KEYS}
    missing = [k for k, v in values.items() if not v]
    if missing:
        raise ConfigMissing(missing)

    port_raw = (raw.get("PORT") or "").strip()
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError:
        raise ConfigMissing(["PORT"], f"PORT must be an integer, got {port_raw!r}") from None

    origins = tuple(o.strip() for o in (raw.get("CORS_ORIGINS") or "*").split(",") if o.strip()) or ("*",)

    return Settings(
        region=values["AWS_REGION"],
        access_key_id=values["AWS_CLIENT_ID"],
        secret_access_key=values["AWS_CLIENT_SECRET"],
        bucket=values["S3_BUCKET"],
        key=values["S3_FILE"],
        port=port,
        log_level=(raw.get("LOG_LEVEL") or "INFO").strip().upper(),
        cors_origins=origins,
        endpoint_url=(raw.get("S3_ENDPOINT_URL") or "").strip() or None,
    )
