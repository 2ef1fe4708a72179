"""
Immutable runtime configuration for the intake application.

``clinic.settings`` builds a single :class:`IntakeConfig` from the
environment at start-up and exposes it as ``settings.INTAKE``.  Code
reads values from that object and never mutates it; tests swap the
whole object with ``dataclasses.replace``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _csv(name: str) -> tuple[str, ...]:
    return tuple(v.strip() for v in os.getenv(name, "").split(",") if v.strip())


@dataclass(frozen=True)
class IntakeConfig:
    jwt_secret: str
    access_token_lifetime: timedelta = timedelta(hours=8)
    allowed_origins: tuple[str, ...] = ("http://localhost:3000",)
    general_rate: str = "200/15m"
    login_rate: str = "20/15m"
    audit_async: bool = False
    audit_workers: int = 2
    page_size_default: int = 20
    page_size_max: int = 100
    export_filename: str = "submissions.csv"
    sort_fields: tuple[str, ...] = field(default=("created_at", "updated_at", "status"))


def load_from_env(secret_key: str) -> IntakeConfig:
    """Read the intake settings from the process environment.

    ``JWT_SECRET`` falls back to Django's ``SECRET_KEY`` so a development
    checkout works without extra configuration.
    """
    origins = [os.getenv("FRONTEND_URL", "").strip(), "http://localhost:3000", *_csv("CORS_ALLOWED_ORIGINS")]
    return IntakeConfig(
        jwt_secret=os.getenv("JWT_SECRET") or secret_key,
        access_token_lifetime=timedelta(hours=int(os.getenv("JWT_ACCESS_HOURS", "8"))),
        allowed_origins=tuple(dict.fromkeys(o.rstrip("/") for o in origins if o)),
        general_rate=os.getenv("RATE_LIMIT_GENERAL", "200/15m"),
        login_rate=os.getenv("RATE_LIMIT_LOGIN", "20/15m"),
        audit_async=_flag("AUDIT_ASYNC", "0"),
        audit_workers=int(os.getenv("AUDIT_WORKERS", "2")),
    )
