"""
Site views: API status probes, clean-URL HTML pages, static asset
mounts and the JSON 404/500 handlers.
"""
import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_safe
from django.views.static import serve
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .mail_service import mail_service

logger = logging.getLogger(__name__)

API_VERSION = '1.0.0'

# Served at /<slug> (and /<slug>.html) from SITE_ROOT/<slug>.html
SITE_PAGES = (
    'admin',
    'about',
    'contact',
    'attorney-details',
    'our-attorneys',
    'our-history',
    'our-pricing',
    'testimonial',
    'faq',
    'accordion',
    'achievements',
    'corporate-commercial-law',
    'dispute-resolution-litigation',
    'private-client-family',
    'property-real-estate',
    'specialist-advisory-compliance',
    'case-study-details',
    '404-page',
)

# Served at /<mount>/<path> from SITE_ROOT/<mount>/<path>
ASSET_MOUNTS = ('img', 'css', 'js', 'fonts', 'quform', 'search')

PAGE_CACHE_CONTROL = 'public, max-age=3600'
ASSET_CACHE_CONTROL = 'public, max-age=31536000'


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def api_root(request):
    return Response({
        'message': f'{settings.SITE_NAME} API',
        'version': API_VERSION,
        'status': 'running',
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def api_health(request):
    return Response({
        'status': 'healthy',
        'mail': 'enabled' if mail_service.enabled else 'disabled',
    })


@require_safe
def site_page(request, slug='index'):
    """Serve SITE_ROOT/<slug>.html. Missing files become a JSON 404."""
    response = serve(request, f'{slug}.html', document_root=settings.SITE_ROOT)
    response['Cache-Control'] = PAGE_CACHE_CONTROL
    return response


@require_safe
def site_asset(request, mount, path):
    response = serve(request, path, document_root=settings.SITE_ROOT / mount)
    response['Cache-Control'] = ASSET_CACHE_CONTROL
    return response


def not_found(request, exception=None):
    return JsonResponse({'error': 'Route not found'}, status=404)


def server_error(request):
    logger.error(f"Unhandled error on {request.method} {request.path}")
    return JsonResponse({'error': 'Something went wrong!'}, status=500)
