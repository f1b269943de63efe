"""
Vendors — Custom Managers

VendorManager enforcing shop-name-based authentication with UUID PKs.

@file vendors/managers.py
"""

from django.contrib.auth.models import BaseUserManager
from django.utils.translation import gettext_lazy as _


class VendorManager(BaseUserManager):
    """Custom manager: create_user / create_superuser with shop_name as identifier."""

    def _create_user(self, shop_name, password=None, **extra_fields):
        if not shop_name:
            raise ValueError(_('Shop name is required.'))
        vendor = self.model(shop_name=shop_name.strip(), **extra_fields)
        vendor.set_password(password)
        vendor.save(using=self._db)
        return vendor

    def create_user(self, shop_name, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(shop_name, password, **extra_fields)

    def create_superuser(self, shop_name, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self._create_user(shop_name, password, **extra_fields)

    def active(self):
        return self.filter(is_active=True)
