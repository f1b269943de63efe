"""
Inventory — Models

Stock items held by a vendor. Items are either entered manually or
generated by a karagir "in" ledger entry (source_type=karagir), in which
case the ledger entry owns the item through KaragirEntry.linked_item.

HUID numbers are unique across ALL vendors for gold items; the partial
unique constraint below is the last line of defence behind the service
layer check.

@file inventory/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    WEIGHT_DECIMAL_PLACES,
    WEIGHT_MAX_DIGITS,
)
from core.models import BaseModel, MetalType


class Item(BaseModel):
    """A single piece of jewellery in a vendor's stock."""

    class SourceType(models.TextChoices):
        MANUAL = 'manual', _('Manual')
        KARAGIR = 'karagir', _('Karagir')

    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('vendor'),
    )
    jewellery_name = models.CharField(_('jewellery name'), max_length=200)
    metal_type = models.CharField(
        _('metal type'), max_length=10,
        choices=MetalType.choices, db_index=True,
    )
    subtype = models.CharField(_('subtype'), max_length=60)
    gross_weight = models.DecimalField(
        _('gross weight (g)'), max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, null=True, blank=True,
    )
    net_weight = models.DecimalField(
        _('net weight (g)'), max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, null=True, blank=True,
    )
    purity = models.CharField(_('purity'), max_length=30, blank=True)
    labour_charge = models.DecimalField(
        _('labour charge'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, null=True, blank=True,
    )
    balance = models.CharField(_('balance'), max_length=60, default='0', blank=True)
    huid_no = models.CharField(
        _('HUID number'), max_length=6, null=True, blank=True,
        help_text=_('Gold only. Hallmark Unique ID, 6 alphanumeric characters.'),
    )
    karat_carat = models.CharField(
        _('karat / carat'), max_length=30, blank=True,
        help_text=_('Silver and other metals only.'),
    )
    source_type = models.CharField(
        _('source type'), max_length=10,
        choices=SourceType.choices, default=SourceType.MANUAL,
    )
    is_active = models.BooleanField(
        _('active'), default=True,
        help_text=_('Cleared when the item is sold to a customer.'),
    )

    class Meta:
        verbose_name = _('item')
        verbose_name_plural = _('items')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['vendor', 'metal_type'], name='item_vendor_metal_idx'),
            models.Index(fields=['vendor', 'source_type'], name='item_vendor_source_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['huid_no'],
                condition=models.Q(metal_type='gold') & models.Q(huid_no__isnull=False),
                name='unique_gold_item_huid',
            ),
            models.CheckConstraint(
                condition=models.Q(net_weight__isnull=True)
                | models.Q(gross_weight__isnull=True)
                | models.Q(net_weight__lte=models.F('gross_weight')),
                name='item_net_lte_gross_weight',
            ),
        ]

    def __str__(self):
        return f'{self.jewellery_name} ({self.metal_type})'
