"""
Karagir — URL Configuration

The collection route also answers DELETE (wipe the vendor's ledger), so
the viewset is bound explicitly instead of through a router.

@file karagir/urls.py
"""

from django.urls import path

from .views import KaragirEntryViewSet

app_name = 'ledger'

entry_list = KaragirEntryViewSet.as_view({
    'get': 'list',
    'post': 'create',
    'delete': 'destroy_all',
})
entry_detail = KaragirEntryViewSet.as_view({
    'get': 'retrieve',
    'put': 'update',
    'patch': 'partial_update',
    'delete': 'destroy',
})
entry_pending_out = KaragirEntryViewSet.as_view({'get': 'pending_out'})

urlpatterns = [
    path('', entry_list, name='entry-list'),
    path('pending-out/', entry_pending_out, name='entry-pending-out'),
    path('<uuid:pk>/', entry_detail, name='entry-detail'),
]
