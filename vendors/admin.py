"""
Vendors — Django Admin Configuration

@file vendors/admin.py
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.utils.translation import gettext_lazy as _

from .models import Vendor


class VendorCreationForm(UserCreationForm):
    class Meta:
        model = Vendor
        fields = ('shop_name', 'vendor_type')


class VendorChangeForm(UserChangeForm):
    class Meta:
        model = Vendor
        fields = '__all__'


@admin.register(Vendor)
class VendorAdmin(BaseUserAdmin):
    form = VendorChangeForm
    add_form = VendorCreationForm

    list_display = ('shop_name', 'vendor_type', 'contact', 'is_active', 'is_staff', 'date_joined')
    list_filter = ('vendor_type', 'is_active', 'is_staff', 'is_superuser')
    search_fields = ('shop_name', 'contact', 'address')
    readonly_fields = ('id', 'created_at', 'updated_at', 'date_joined', 'last_login')
    ordering = ('shop_name',)

    fieldsets = (
        (None, {'fields': ('id', 'shop_name', 'password')}),
        (_('Shop'), {'fields': ('vendor_type', 'contact', 'address')}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Dates'), {'fields': ('date_joined', 'last_login', 'created_at', 'updated_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('shop_name', 'vendor_type', 'password1', 'password2'),
        }),
    )
