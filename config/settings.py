"""Waitlist settings read from the environment"""
import os
from dotenv import load_dotenv

load_dotenv()

# Table created by the waitlist migration (email is the unique key)
WAITLIST_TABLE = os.environ.get('WAITLIST_TABLE', 'waitlist_rnd_agent')


def _read_timeout(raw):
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 10.0
    # 0 or negative disables the bound
    return value if value > 0 else None


# Seconds to wait for the persistence call before giving up
SUBMIT_TIMEOUT = _read_timeout(os.environ.get('WAITLIST_SUBMIT_TIMEOUT', '10'))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('CORS_ORIGINS', 'http://localhost:3000').split(',')
    if origin.strip()
]
