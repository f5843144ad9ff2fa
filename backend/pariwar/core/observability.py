"""Observability helpers (logging setup, Sentry init and scrubbing).

Initialisation is a no-op for Sentry when no DSN is configured, so the
API runs the same locally and in deployed environments.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from pariwar.core.config import Settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_SCRUBBED_HEADERS = ("authorization", "cookie", "set-cookie", "x-api-key")


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the process."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)


def _before_send(event: Dict[str, Any], hint: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Scrub obvious PII / secrets before sending to Sentry.

    - Drop Authorization & Cookie headers
    - Remove request data/body (keep method + URL)
    """
    req = event.get("request") or {}
    headers = req.get("headers") or {}
    for k in list(headers.keys()):
        if k.lower() in _SCRUBBED_HEADERS:
            headers.pop(k, None)
    req.pop("data", None)
    event["request"] = req
    return event


def init_sentry(settings: Settings, service: str = "api") -> bool:
    """Initialise Sentry once for this process.

    Returns True if Sentry is initialised; False otherwise.
    """
    if not settings.SENTRY_DSN:
        return False
    if getattr(init_sentry, "_done", False):  # prevent duplicate init in same process
        return True
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[FastApiIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=float(settings.SENTRY_TRACES_SAMPLE_RATE or 0),
        profiles_sample_rate=float(settings.SENTRY_PROFILES_SAMPLE_RATE or 0),
        environment=settings.ENVIRONMENT,
        release=settings.SENTRY_RELEASE,
        before_send=_before_send,
    )
    sentry_sdk.set_tag("service", service)
    init_sentry._done = True  # type: ignore[attr-defined]
    return True


def capture_exception(settings: Settings, exc: BaseException) -> None:
    """Report ``exc`` to Sentry when it is configured."""
    if settings.SENTRY_DSN:
        sentry_sdk.capture_exception(exc)


__all__ = ["configure_logging", "init_sentry", "capture_exception"]
