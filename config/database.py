"""Database configuration and Supabase client initialization"""
import os
from dotenv import load_dotenv
from supabase import create_client, Client

load_dotenv()

# Supabase configuration
# These must be set as environment variables - no defaults for security
SUPABASE_URL = os.environ.get('SUPABASE_URL')
SUPABASE_KEY = os.environ.get('SUPABASE_ANON_KEY')

_supabase = None


def get_supabase() -> Client:
    """Get the Supabase client instance, creating it on first use"""
    global _supabase
    if _supabase is not None:
        return _supabase

    if not SUPABASE_URL or not SUPABASE_KEY:
        raise ValueError(
            "Missing required environment variables: SUPABASE_URL and SUPABASE_ANON_KEY must be set. "
            "Please configure these in your environment or .env file."
        )

    _supabase = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _supabase
