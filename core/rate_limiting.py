"""
Rate Limiting Utilities

Fixed-window request counting per client IP, kept in the Django cache
(local memory in development, Redis when REDIS_ENABLED=True).
"""
import time

from django.core.cache import cache

RATE_LIMIT_MESSAGE = 'Too many requests from this IP, please try again later.'


def get_client_ip(request):
    """Get client IP address from request."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


def check_rate_limit(identifier, max_count, window_seconds):
    """
    Count one request for `identifier` and check it against the limit.

    Args:
        identifier: client IP address
        max_count: maximum requests allowed per window
        window_seconds: window length in seconds

    Returns:
        tuple: (is_allowed, retry_after_seconds)
    """
    now = int(time.time())
    window_start = now - (now % window_seconds)
    key = f'ratelimit:{identifier}:{window_start}'

    cache.add(key, 0, timeout=window_seconds)
    try:
        count = cache.incr(key)
    except ValueError:
        # Key expired between add() and incr()
        cache.set(key, 1, timeout=window_seconds)
        count = 1

    if count > max_count:
        retry_after = window_start + window_seconds - now
        return False, retry_after

    return True, 0
