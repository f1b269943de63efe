"""
Jewellery Stock — Root URL Configuration

All API endpoints are namespaced under /api/v1/.

@file config/urls.py
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from django.views.defaults import page_not_found
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'Jewellery Stock Administration'
admin.site.site_title = 'Jewellery Stock'
admin.site.index_title = 'Inventory & Karagir Ledger'


def not_found(request, exception):
    """404 for URLs no view resolves: JSON error body under /api/, HTML page elsewhere."""
    if request.path.startswith('/api/'):
        return JsonResponse({'message': 'Resource not found.'}, status=404)
    return page_not_found(request, exception)


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """Jewellery Stock API v1 — endpoint directory."""
    return Response({
        'auth': {
            'login': reverse('api-v1:auth:login', request=request, format=format),
            'refresh': reverse('api-v1:auth:token-refresh', request=request, format=format),
            'logout': reverse('api-v1:auth:logout', request=request, format=format),
            'me': reverse('api-v1:auth:me', request=request, format=format),
        },
        'ledger': {
            'entries': reverse('api-v1:ledger:entry-list', request=request, format=format),
            'pending_out': reverse('api-v1:ledger:entry-pending-out', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include('vendors.urls', namespace='auth')),
    path('ledger/', include('karagir.urls', namespace='ledger')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]

handler404 = not_found
