"""Waitlist-related business logic"""
import asyncio
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from config.database import get_supabase
from config.settings import WAITLIST_TABLE
from utils.logger import log_error, log_info, mask_email

# Postgres unique_violation
UNIQUE_VIOLATION = '23505'


class WaitlistError(Exception):
    """Persistence failure while adding an email to the waitlist"""

    kind = 'other'

    def __init__(self, message, kind=None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class DuplicateEmailError(WaitlistError):
    """The email is already on the waitlist (unique key on email)"""

    kind = 'duplicate'


def is_duplicate_violation(error):
    """Check whether a PostgREST error came from the unique constraint on email"""
    if getattr(error, 'code', None) == UNIQUE_VIOLATION:
        return True
    message = str(getattr(error, 'message', None) or error).lower()
    return 'duplicate' in message or 'unique' in message


def _insert_email(email):
    supabase = get_supabase()
    return supabase.table(WAITLIST_TABLE).insert({
        'email': email,
        'created_at': datetime.now(timezone.utc).isoformat()
    }).execute()


async def add_to_waitlist(email):
    """Add email to waitlist

    Returns None on success. Raises DuplicateEmailError when the email is
    already registered and WaitlistError for any other failure.
    """
    email = email.strip().lower()

    if not email:
        raise ValueError("Email is required")

    try:
        # supabase-py's sync client blocks; keep it off the event loop
        await asyncio.to_thread(_insert_email, email)
    except APIError as e:
        if is_duplicate_violation(e):
            log_info(f"Waitlist signup skipped, {mask_email(email)} already registered")
            raise DuplicateEmailError("This email is already on our waitlist") from e
        log_error("Error adding to waitlist", e)
        raise WaitlistError("Failed to join waitlist") from e
    except Exception as e:
        log_error("Error adding to waitlist", e)
        raise WaitlistError("Failed to join waitlist") from e

    log_info(f"Added {mask_email(email)} to waitlist")
