"""
Vendors — Models

Custom user model: every authenticated principal is a jewellery shop
(vendor). All ledger and inventory records are scoped to one vendor.

@file vendors/models.py
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel
from vendors.managers import VendorManager


class Vendor(AbstractBaseUser, PermissionsMixin, BaseModel):
    """
    A jewellery shop account.

    Authentication is shop-name based; the JWT carries the vendor id,
    which scopes every ledger query.
    """

    class TypeChoices(models.TextChoices):
        RETAILER = 'retailer', _('Retailer')
        WHOLESALER = 'wholesaler', _('Wholesaler')

    shop_name = models.CharField(_('shop name'), max_length=150, unique=True)
    contact = models.CharField(_('contact'), max_length=30, blank=True)
    address = models.TextField(_('address'), blank=True)
    vendor_type = models.CharField(
        _('vendor type'), max_length=12,
        choices=TypeChoices.choices, default=TypeChoices.RETAILER,
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = VendorManager()

    USERNAME_FIELD = 'shop_name'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('vendor')
        verbose_name_plural = _('vendors')
        ordering = ['shop_name']

    def __str__(self):
        return self.shop_name
