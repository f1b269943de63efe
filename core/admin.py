"""
Core — Django Admin Configuration

Read-only audit trail browser. Ledger rows link back to their entry.

@file core/admin.py
"""

from django.contrib import admin
from django.urls import NoReverseMatch, reverse
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_LOGIN,
    AUDIT_ACTION_LOGOUT,
    AUDIT_ACTION_STATUS_CHANGE,
    AUDIT_ACTION_UPDATE,
)
from core.models import AuditLog

ACTION_COLORS = {
    AUDIT_ACTION_CREATE: '#16a34a',
    AUDIT_ACTION_UPDATE: '#2563eb',
    AUDIT_ACTION_DELETE: '#dc2626',
    AUDIT_ACTION_STATUS_CHANGE: '#ca8a04',
    AUDIT_ACTION_LOGIN: '#0891b2',
    AUDIT_ACTION_LOGOUT: '#64748b',
}

# AuditLog.model_name -> admin change view of that model
TARGET_ADMIN_URLS = {
    'KaragirEntry': 'admin:karagir_karagirentry_change',
    'Vendor': 'admin:vendors_vendor_change',
}


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'action_badge', 'target', 'actor', 'ip_address')
    list_filter = ('action', 'model_name')
    search_fields = ('object_id', 'actor__shop_name')
    list_select_related = ('actor',)
    list_per_page = 50
    date_hierarchy = 'timestamp'
    fields = (
        'timestamp', 'action', 'actor', 'model_name', 'object_id',
        'ip_address', 'user_agent', 'old_values', 'new_values',
    )
    readonly_fields = fields

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Action'), ordering='action')
    def action_badge(self, obj):
        return format_html(
            '<span style="background:{}; color:#fff; padding:1px 6px; border-radius:3px;">{}</span>',
            ACTION_COLORS.get(obj.action, '#64748b'), obj.get_action_display(),
        )

    @admin.display(description=_('Target'))
    def target(self, obj):
        label = f'{obj.model_name} {obj.object_id}'
        url_name = TARGET_ADMIN_URLS.get(obj.model_name)
        if url_name is None:
            return label
        try:
            url = reverse(url_name, args=[obj.object_id])
        except NoReverseMatch:
            return label
        return format_html('<a href="{}">{}</a>', url, label)
