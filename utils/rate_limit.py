"""Rate limiting configuration for API endpoints"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os

def init_rate_limiter(app):
    """Initialize rate limiter with Flask app"""
    # Default rate limits (per minute)
    default_limit = os.environ.get('RATE_LIMIT_DEFAULT', '100 per minute')
    
    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[default_limit],
        storage_uri=os.environ.get('RATE_LIMIT_STORAGE_URI', 'memory://'),  # Optional: Redis URL for distributed rate limiting
        headers_enabled=True,  # Include rate limit headers in response
        enabled=os.environ.get('RATE_LIMIT_ENABLED', 'true').lower() != 'false'
    )
    
    return limiter

# Rate limit presets for different endpoint types
RATE_LIMITS = {
    'waitlist': os.environ.get('RATE_LIMIT_WAITLIST', '20 per minute'),  # Public signup form
}
