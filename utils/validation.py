"""Input validation and sanitization utilities"""
import re
from typing import Any, Optional

# 64-char local part + "@" + 255-char domain
MAX_EMAIL_LENGTH = 320


def sanitize_string(value: Any, max_length: Optional[int] = None, allow_empty: bool = True) -> Optional[str]:
    """Sanitize string input"""
    if value is None:
        return None if allow_empty else ""
    
    # Convert to string and strip whitespace
    sanitized = str(value).strip()
    
    # Remove null bytes and control characters (except newlines and tabs)
    sanitized = re.sub(r'[\x00-\x08\x0b-\x0c\x0e-\x1f]', '', sanitized)
    
    # Enforce max length
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
    
    return sanitized if (sanitized or allow_empty) else None


def normalize_email(value: Any) -> str:
    """Trim surrounding whitespace; None becomes an empty string"""
    if value is None:
        return ""
    return str(value).strip()


def is_valid_email(email: str) -> bool:
    """
    Structural plausibility check for an email address.

    Requires exactly one '@', a non-empty local part and a domain made of
    at least two non-empty dot-separated segments. Whitespace and anything
    longer than MAX_EMAIL_LENGTH are rejected.
    No DNS or MX lookups are made; anything stricter is left to the backend.
    """
    if not email or re.search(r'\s', email):
        return False

    if len(email) > MAX_EMAIL_LENGTH:
        return False

    if email.count('@') != 1:
        return False

    local, domain = email.split('@')
    if not local:
        return False

    segments = domain.split('.')
    if len(segments) < 2:
        return False

    return all(segments)
