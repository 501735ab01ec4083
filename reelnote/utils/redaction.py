"""Simple redaction helpers for logs and diagnostics."""

from __future__ import annotations

import re

_URL_USERINFO_RE = re.compile(r"([a-z][a-z0-9+.-]*://)([^@/]+)@", re.IGNORECASE)
_QUERY_SECRET_RE = re.compile(
    r"(?i)(token|secret|password|api_key|apikey|access_token|refresh_token)=([^&\s]+)"
)
_BEARER_RE = re.compile(r"(?i)(bearer\s+)([A-Za-z0-9._~-]+)")
_TELEGRAM_BOT_RE = re.compile(r"(/bot)(\d+:[A-Za-z0-9_-]+)")
_WEBHOOK_PATH_RE = re.compile(r"(/webhooks/)(\d+:[A-Za-z0-9_-]+)")
_IMDB_KEY_RE = re.compile(r"(/API/[A-Za-z]+/)([^/\s?\"']+)")


def redact_secrets(text: str) -> str:
    """Redact common secret patterns from a log string."""
    if not text:
        return text
    redacted = _URL_USERINFO_RE.sub(r"\1***@", text)
    redacted = _QUERY_SECRET_RE.sub(r"\1=***", redacted)
    redacted = _BEARER_RE.sub(r"\1***", redacted)
    redacted = _TELEGRAM_BOT_RE.sub(r"\1***", redacted)
    redacted = _WEBHOOK_PATH_RE.sub(r"\1***", redacted)
    redacted = _IMDB_KEY_RE.sub(r"\1***", redacted)
    return redacted
