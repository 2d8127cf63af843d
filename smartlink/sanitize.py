"""Log sanitisation helpers for the SmartLink client."""

from __future__ import annotations

import re

_SESSION_RE = re.compile(r"(?i)(x-session['\"]?\s*[:=]\s*['\"]?)([A-Za-z0-9\-._~+/]+=*)")
_TOKEN_FIELD_RE = re.compile(r"(?i)(\"?(?:token|password|secret)\"?\s*[:=]\s*\"?)([^\"&,\s}]+)")
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def redact_text(value: str | None) -> str:
    """Return ``value`` with session tokens, secrets and emails removed."""

    if not value:
        return ""
    text = str(value)
    redacted = _SESSION_RE.sub(lambda match: f"{match.group(1)}***", text)
    redacted = _TOKEN_FIELD_RE.sub(lambda match: f"{match.group(1)}***", redacted)
    return _EMAIL_RE.sub("***@***", redacted)


def mask_identifier(value: str | None) -> str:
    """Return a masked identifier suitable for log output."""

    if value is None:
        return ""
    trimmed = str(value).strip()
    if not trimmed:
        return ""
    if len(trimmed) <= 4:
        return "***"
    if len(trimmed) <= 8:
        return f"{trimmed[:2]}...{trimmed[-2:]}"
    prefix = trimmed[:6]
    suffix = trimmed[-4:]
    return f"{prefix}...{suffix}"


__all__ = ["mask_identifier", "redact_text"]
