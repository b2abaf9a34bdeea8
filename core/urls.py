"""
URL configuration for the Spring Legal Consultancy site.

- /api, /api/health: status probes
- /api/v1/contact: public contact form
- /api/v1/admin/...: admin panel API (bearer token)
- /<slug>: clean-URL HTML pages, /<mount>/...: static assets
"""
from django.urls import include, path, re_path

from core import views

PAGE_PATTERN = '|'.join(views.SITE_PAGES)
ASSET_PATTERN = '|'.join(views.ASSET_MOUNTS)

urlpatterns = [
    path('api', views.api_root, name='api-root'),
    path('api/health', views.api_health, name='api-health'),
    path('api/v1/', include('contact.urls')),
    path('api/v1/admin/', include('accounts.urls')),
    path('api/v1/admin/', include('contact.admin_urls')),

    # Static website
    path('', views.site_page, name='home'),
    path('index.html', views.site_page),
    re_path(rf'^(?P<slug>{PAGE_PATTERN})(?:\.html)?$', views.site_page, name='page'),
    re_path(rf'^(?P<mount>{ASSET_PATTERN})/(?P<path>.+)$', views.site_asset, name='asset'),
]

handler404 = 'core.views.not_found'
handler500 = 'core.views.server_error'
