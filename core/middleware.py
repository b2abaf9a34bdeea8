"""
Site-wide middleware: request logging, global rate limiting and the
Content-Security-Policy header.
"""
import logging

from django.conf import settings
from django.http import JsonResponse

from .rate_limiting import RATE_LIMIT_MESSAGE, check_rate_limit, get_client_ip

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Log method and path of every inbound request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        logger.info(f"{request.method} {request.path}")
        return self.get_response(request)


class RateLimitMiddleware:
    """
    Per-IP request limit across the whole site.

    Only enforced when settings.RATE_LIMIT_ENABLED is true (production).
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if settings.RATE_LIMIT_ENABLED:
            ip = get_client_ip(request)
            allowed, retry_after = check_rate_limit(
                ip,
                settings.RATE_LIMIT_MAX,
                settings.RATE_LIMIT_WINDOW_SECONDS
            )
            if not allowed:
                logger.warning(f"Rate limit exceeded for {ip}")
                response = JsonResponse({'error': RATE_LIMIT_MESSAGE}, status=429)
                response['Retry-After'] = str(retry_after)
                return response

        return self.get_response(request)


class ContentSecurityPolicyMiddleware:
    """
    Add a Content-Security-Policy header built from
    settings.CONTENT_SECURITY_POLICY ({directive: [sources]}).
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        policy = '; '.join(
            f"{directive} {' '.join(sources)}"
            for directive, sources in settings.CONTENT_SECURITY_POLICY.items()
        )
        if policy:
            response.setdefault('Content-Security-Policy', policy)
        return response
