"""Input hygiene and credential policy checks.

``sanitize`` only trims and bounds free text. It does not escape HTML;
rendering layers are responsible for output encoding.
"""

from __future__ import annotations

import re

from shared.auth.models import PasswordCheck

MAX_INPUT_LENGTH = 1000
MAX_EMAIL_LENGTH = 254

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72  # bcrypt ignores everything past 72 bytes
PASSWORD_SPECIAL_CHARACTERS = "@$!%*?&"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_PASSWORD_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"[a-z]"), "Password must contain a lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain an uppercase letter"),
    (re.compile(r"\d"), "Password must contain a number"),
    (
        re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]"),
        f"Password must contain a special character ({PASSWORD_SPECIAL_CHARACTERS})",
    ),
]


def sanitize(text: str | None) -> str:
    """Strip surrounding whitespace and cap the length at MAX_INPUT_LENGTH."""
    if not text:
        return ""
    # Strip again after truncation so the result is a fixed point.
    return text.strip()[:MAX_INPUT_LENGTH].strip()


def validate_email(email: str | None) -> bool:
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_password(password: str | None) -> PasswordCheck:
    """Check a password against every policy rule.

    All violated rules are reported, not only the first one, so the client
    can show the complete list at once.
    """
    password = password or ""
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    errors.extend(message for pattern, message in _PASSWORD_RULES if not pattern.search(password))
    return PasswordCheck(valid=not errors, errors=errors)
