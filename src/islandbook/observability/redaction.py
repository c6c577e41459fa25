"""Redaction helpers for safe logging. Guest e-mails are logged only as references."""

import hashlib


def email_ref(email: str) -> str:
    """Stable short reference for an e-mail, safe to log and correlate."""
    digest = hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()
    return f"email:{digest[:12]}"
