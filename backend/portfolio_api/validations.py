"""Contact form field rules and HTML escaping.

The same functions back the instant feedback on the site and the
authoritative server-side check, so they stay pure: every validator returns
an error message or ``None`` and never raises.
"""

from __future__ import annotations

import re
from typing import Optional, TypedDict

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 1000

# Whitespace as browsers define it for trim() and regex \s. Python's own
# str.strip() and \s also cover \x1c-\x1f and \x85 but not \ufeff.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
_WS = re.escape(WHITESPACE)

_NAME_PATTERN = re.compile(f"[a-zA-Z{_WS}]+")
_EMAIL_PATTERN = re.compile(f"[^{_WS}@]+@[^{_WS}@]+\\.[^{_WS}@]+")

_HTML_ENTITIES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
        "`": "&#x60;",
        "=": "&#x3D;",
    }
)


class ContactFormData(TypedDict):
    name: str
    email: str
    message: str
    honeypot: str


def trim(text: str) -> str:
    return text.strip(WHITESPACE)


def validate_name(name: str) -> Optional[str]:
    trimmed = trim(name)

    if len(trimmed) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters"

    if len(trimmed) > NAME_MAX_LENGTH:
        return f"Name must be at most {NAME_MAX_LENGTH} characters"

    if not _NAME_PATTERN.fullmatch(trimmed):
        return "Name can only contain letters and spaces"

    return None


def validate_email(email: str) -> Optional[str]:
    trimmed = trim(email)

    if not trimmed:
        return "Email is required"

    if not _EMAIL_PATTERN.fullmatch(trimmed):
        return "Please enter a valid email address"

    return None


def validate_message(message: str) -> Optional[str]:
    trimmed = trim(message)

    if len(trimmed) < MESSAGE_MIN_LENGTH:
        return f"Message must be at least {MESSAGE_MIN_LENGTH} characters"

    if len(trimmed) > MESSAGE_MAX_LENGTH:
        return f"Message must be at most {MESSAGE_MAX_LENGTH} characters"

    return None


def validate_contact_form(data: ContactFormData) -> dict[str, str]:
    """Return field -> message for every failing field; empty means valid."""

    errors: dict[str, str] = {}

    name_error = validate_name(data["name"])
    if name_error:
        errors["name"] = name_error

    email_error = validate_email(data["email"])
    if email_error:
        errors["email"] = email_error

    message_error = validate_message(data["message"])
    if message_error:
        errors["message"] = message_error

    return errors


def sanitize_input(text: str) -> str:
    """Escape ``& < > " ' / ` =`` as HTML entities in a single pass."""

    return text.translate(_HTML_ENTITIES)
