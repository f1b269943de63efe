"""
Karagir — Models

Ledger of material movements between a vendor and its karagirs
(subcontracted artisans). An "out" entry records raw metal handed over;
an "in" entry records finished jewellery received back, generates a stock
item, and closes the oldest pending "out" for the same karagir and metal.

Out-only and in-only columns share one table; which set is populated is
decided by entry_type and enforced by the serializers and service layer.

@file karagir/models.py
"""

import uuid

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

OUT_ONLY_FIELDS = ('grams_given', 'purity_given')
IN_ONLY_FIELDS = (
    'jewellery_name', 'subtype', 'huid_no', 'karat_carat', 'gross_weight',
    'net_weight', 'purity_received', 'labour_charge', 'balance',
)


class KaragirEntry(BaseModel):
    """
    One ledger line for (vendor, karagir, metal).

    Status is meaningful for OUT entries only: PENDING until an IN entry
    reconciles it, back to PENDING if that IN entry is deleted. IN entries
    are always COMPLETED.
    """

    class EntryType(models.TextChoices):
        OUT = 'out', _('Out (material given)')
        IN = 'in', _('In (jewellery received)')

    class StatusChoices(models.TextChoices):
        PENDING = 'pending', _('Pending')
        COMPLETED = 'completed', _('Completed')

    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='karagir_entries',
        verbose_name=_('vendor'),
    )
    karagir_name = models.CharField(
        _('karagir name'), max_length=150, db_index=True,
        help_text=_('Stored lower-cased; the matching key for reconciliation.'),
    )
    metal_type = models.CharField(
        _('metal type'), max_length=10, choices=MetalType.choices,
    )
    entry_type = models.CharField(
        _('entry type'), max_length=3, choices=EntryType.choices, editable=False,
    )
    status = models.CharField(
        _('status'), max_length=10,
        choices=StatusChoices.choices, default=StatusChoices.PENDING,
    )
    transaction_id = models.UUIDField(
        _('transaction ID'), default=uuid.uuid4, unique=True, editable=False,
    )
    remarks = models.TextField(_('remarks'), blank=True, default='')

    # Out only
    grams_given = models.DecimalField(
        _('grams given'), max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, null=True, blank=True,
    )
    purity_given = models.CharField(_('purity given'), max_length=30, blank=True)

    # In only
    jewellery_name = models.CharField(_('jewellery name'), max_length=200, blank=True)
    subtype = models.CharField(_('subtype'), max_length=60, blank=True)
    huid_no = models.CharField(_('HUID number'), max_length=6, null=True, blank=True)
    karat_carat = models.CharField(_('karat / carat'), max_length=30, blank=True)
    gross_weight = models.DecimalField(
        _('gross weight (g)'), max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, null=True, blank=True,
    )
    net_weight = models.DecimalField(
        _('net weight (g)'), max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, null=True, blank=True,
    )
    purity_received = models.CharField(_('purity received'), max_length=30, blank=True)
    labour_charge = models.DecimalField(
        _('labour charge'), max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, null=True, blank=True,
    )
    balance = models.CharField(_('balance'), max_length=60, blank=True, default='0')

    linked_item = models.OneToOneField(
        'inventory.Item',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='karagir_entry',
        verbose_name=_('linked item'),
    )
    completes_out_entry = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='completed_by_entries',
        limit_choices_to={'entry_type': 'out'},
        verbose_name=_('completes out entry'),
    )

    class Meta:
        verbose_name = _('karagir entry')
        verbose_name_plural = _('karagir entries')
        ordering = ['-created_at']
        indexes = [
            models.Index(
                fields=['vendor', 'karagir_name', 'metal_type', 'entry_type', 'status'],
                name='karagir_pending_match_idx',
            ),
            models.Index(fields=['vendor', 'created_at'], name='karagir_vendor_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(entry_type='out') | models.Q(status='completed'),
                name='karagir_in_entry_completed',
            ),
            models.CheckConstraint(
                condition=models.Q(grams_given__isnull=True) | models.Q(grams_given__gte=0),
                name='karagir_grams_given_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.entry_type.upper()} {self.karagir_name} {self.metal_type} [{self.status}]'

    @property
    def is_out(self) -> bool:
        return self.entry_type == self.EntryType.OUT

    @property
    def is_in(self) -> bool:
        return self.entry_type == self.EntryType.IN


# Columns a client may change after creation, per entry type. Everything
# else (vendor, entry_type, transaction_id, status, links) is server-owned.
EDITABLE_FIELDS = {
    KaragirEntry.EntryType.OUT: frozenset({'karagir_name', 'metal_type', 'remarks', *OUT_ONLY_FIELDS}),
    KaragirEntry.EntryType.IN: frozenset({'karagir_name', 'metal_type', 'remarks', *IN_ONLY_FIELDS}),
}
