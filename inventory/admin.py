"""
Inventory — Django Admin Configuration

@file inventory/admin.py
"""

from django.contrib import admin

from .models import Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = (
        'jewellery_name', 'vendor', 'metal_type', 'subtype',
        'net_weight', 'huid_no', 'karat_carat', 'source_type', 'is_active', 'created_at',
    )
    list_filter = ('metal_type', 'source_type', 'is_active')
    search_fields = ('jewellery_name', 'huid_no', 'vendor__shop_name')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    list_select_related = ('vendor',)
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)
