"""Logging helpers with sensitive data redaction."""

import re

# Sensitive parameters to redact from URLs and messages
SENSITIVE_PARAMS = [
    "code",
    "token",
    "secret",
    "refresh_token",
    "access_token",
    "client_id",
    "client_secret",
    "authorization",
]


def redact_sensitive_data(text: str) -> str:
    """Redact sensitive query parameters and bearer tokens from a URL or message."""
    redacted = text
    for param in SENSITIVE_PARAMS:
        pattern = rf"\b{param}=([^&\s\"]+)"
        redacted = re.sub(pattern, f"{param}=***REDACTED***", redacted)
    return re.sub(r"(Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+", r"\1 ***REDACTED***", redacted)
