"""
Karagir — Django Admin Configuration

Ledger rows are browsable but read-only: edits must go through the API so
linked items and OUT statuses stay reconciled.

@file karagir/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import KaragirEntry


@admin.register(KaragirEntry)
class KaragirEntryAdmin(admin.ModelAdmin):
    list_display = (
        'created_at', 'vendor', 'karagir_name', 'entry_type', 'metal_type',
        'status_badge', 'grams_given', 'jewellery_name', 'net_weight', 'huid_no',
    )
    list_filter = ('entry_type', 'status', 'metal_type')
    search_fields = ('karagir_name', 'jewellery_name', 'huid_no', 'transaction_id', 'vendor__shop_name')
    list_select_related = ('vendor',)
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)

    fieldsets = (
        (None, {
            'fields': (
                'id', 'vendor', 'karagir_name', 'metal_type', 'entry_type',
                'status', 'transaction_id', 'remarks',
            ),
        }),
        (_('Out'), {'fields': ('grams_given', 'purity_given')}),
        (_('In'), {
            'fields': (
                'jewellery_name', 'subtype', 'huid_no', 'karat_carat',
                'gross_weight', 'net_weight', 'purity_received', 'labour_charge', 'balance',
                'linked_item', 'completes_out_entry',
            ),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Status'))
    def status_badge(self, obj):
        color = '#eab308' if obj.status == KaragirEntry.StatusChoices.PENDING else '#22c55e'
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.get_status_display(),
        )
