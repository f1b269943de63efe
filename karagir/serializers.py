"""
Karagir — Serializers

Read serializer plus one write shape per entry type. Creation dispatches
on ``entryType`` to OutEntryCreateSerializer or InEntryCreateSerializer;
updates dispatch on the stored entry type to the matching patch
serializer. Fields a shape does not declare (immutable columns, fields of
the other entry type, server-managed links) are dropped silently.

@file karagir/serializers.py
"""

import re
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from rest_framework import serializers

from core.constants import (
    AMOUNT_DECIMAL_PLACES,
    AMOUNT_MAX_DIGITS,
    HUID_PATTERN,
    WEIGHT_DECIMAL_PLACES,
    WEIGHT_MAX_DIGITS,
)
from core.models import SUBTYPES_BY_METAL, MetalType

from .models import KaragirEntry

HUID_RE = re.compile(HUID_PATTERN)


def _lowered(value: str | None) -> str:
    return (value or '').strip().lower()


def normalize_karagir_name(value: str | None) -> str:
    return _lowered(value)


class RoundedDecimalField(serializers.DecimalField):
    """
    DecimalField that rounds surplus fractional digits half-up to the
    column precision instead of rejecting them.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('rounding', ROUND_HALF_UP)
        super().__init__(*args, **kwargs)

    def validate_precision(self, value):
        try:
            value = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=self.rounding)
        except InvalidOperation:
            self.fail('invalid')
        return super().validate_precision(value)


def _weight_field(source, **kwargs):
    return RoundedDecimalField(
        source=source, max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, min_value=Decimal('0'), **kwargs,
    )


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

_CAMEL_OUT_FIELDS = ('gramsGiven', 'purityGiven')
_CAMEL_IN_FIELDS = (
    'jewelleryName', 'subtype', 'huidNo', 'karatCarat', 'grossWeight', 'netWeight',
    'purityReceived', 'labourCharge', 'balance', 'linkedItemId', 'completesOutEntry',
)


class KaragirEntryReadSerializer(serializers.ModelSerializer):
    vendorId = serializers.UUIDField(source='vendor_id', read_only=True)
    karagirName = serializers.CharField(source='karagir_name', read_only=True)
    metalType = serializers.CharField(source='metal_type', read_only=True)
    entryType = serializers.CharField(source='entry_type', read_only=True)
    transactionId = serializers.UUIDField(source='transaction_id', read_only=True)
    gramsGiven = serializers.DecimalField(
        source='grams_given', max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, read_only=True,
    )
    purityGiven = serializers.CharField(source='purity_given', read_only=True)
    jewelleryName = serializers.CharField(source='jewellery_name', read_only=True)
    huidNo = serializers.CharField(source='huid_no', read_only=True)
    karatCarat = serializers.CharField(source='karat_carat', read_only=True)
    grossWeight = serializers.DecimalField(
        source='gross_weight', max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, read_only=True,
    )
    netWeight = serializers.DecimalField(
        source='net_weight', max_digits=WEIGHT_MAX_DIGITS,
        decimal_places=WEIGHT_DECIMAL_PLACES, read_only=True,
    )
    purityReceived = serializers.CharField(source='purity_received', read_only=True)
    labourCharge = serializers.DecimalField(
        source='labour_charge', max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, read_only=True,
    )
    linkedItemId = serializers.UUIDField(source='linked_item_id', read_only=True)
    completesOutEntry = serializers.UUIDField(source='completes_out_entry_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = KaragirEntry
        fields = [
            'id', 'vendorId', 'karagirName', 'metalType', 'entryType', 'status',
            'transactionId', 'remarks',
            *_CAMEL_OUT_FIELDS,
            *_CAMEL_IN_FIELDS,
            'createdAt', 'updatedAt',
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        hidden = _CAMEL_IN_FIELDS if instance.is_out else _CAMEL_OUT_FIELDS
        for name in hidden:
            data.pop(name, None)
        return data


class PendingOutQuerySerializer(serializers.Serializer):
    karagirName = serializers.CharField(source='karagir_name', max_length=150)
    metalType = serializers.ChoiceField(source='metal_type', choices=MetalType.choices)

    def validate_karagirName(self, value):
        return normalize_karagir_name(value)


# ---------------------------------------------------------------------------
# Write — shared fields
# ---------------------------------------------------------------------------

class _EntryWriteSerializer(serializers.Serializer):
    karagirName = serializers.CharField(source='karagir_name', max_length=150)
    metalType = serializers.ChoiceField(source='metal_type', choices=MetalType.choices)
    remarks = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_karagirName(self, value):
        name = normalize_karagir_name(value)
        if not name:
            raise serializers.ValidationError('Karagir name is required.')
        return name


# ---------------------------------------------------------------------------
# Write — OUT
# ---------------------------------------------------------------------------

class OutEntryCreateSerializer(_EntryWriteSerializer):
    """Raw material handed to a karagir."""

    gramsGiven = _weight_field('grams_given')
    purityGiven = serializers.CharField(source='purity_given', max_length=30)


class OutEntryPatchSerializer(OutEntryCreateSerializer):
    """
    Editable OUT fields. Always used with partial=True; status is not
    editable, it only moves through reconciliation.
    """


# ---------------------------------------------------------------------------
# Write — IN
# ---------------------------------------------------------------------------

class InEntryCreateSerializer(_EntryWriteSerializer):
    """Finished jewellery received from a karagir."""

    jewelleryName = serializers.CharField(source='jewellery_name', max_length=200)
    subtype = serializers.CharField(max_length=60)
    huidNo = serializers.CharField(
        source='huid_no', required=False, allow_blank=True, allow_null=True,
    )
    karatCarat = serializers.CharField(
        source='karat_carat', required=False, allow_blank=True, max_length=30,
    )
    grossWeight = _weight_field('gross_weight')
    netWeight = _weight_field('net_weight')
    purityReceived = serializers.CharField(source='purity_received', max_length=30)
    labourCharge = RoundedDecimalField(
        source='labour_charge', max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=AMOUNT_DECIMAL_PLACES, min_value=Decimal('0'),
    )
    balance = serializers.CharField(
        required=False, allow_blank=True, max_length=60, default='0',
    )

    def _current(self, attrs, name):
        if name in attrs:
            return attrs[name]
        return getattr(self.instance, name, None) if self.instance is not None else None

    def validate(self, attrs):
        metal = self._current(attrs, 'metal_type')
        errors = {}

        subtype = _lowered(self._current(attrs, 'subtype'))
        if subtype not in SUBTYPES_BY_METAL.get(metal, ()):
            errors['subtype'] = f"Invalid subtype '{subtype}' for metal type '{metal}'."
        elif 'subtype' in attrs:
            attrs['subtype'] = subtype

        # Exactly one identity field, chosen by metal.
        if metal == MetalType.GOLD:
            huid = (self._current(attrs, 'huid_no') or '').strip()
            if not HUID_RE.match(huid):
                errors['huidNo'] = 'HUID number must be exactly 6 alphanumeric characters for gold.'
            attrs['huid_no'] = huid.upper()
            attrs['karat_carat'] = ''
        else:
            karat = (self._current(attrs, 'karat_carat') or '').strip()
            if not karat:
                errors['karatCarat'] = 'Karat/carat is required for silver and other metals.'
            attrs['karat_carat'] = karat
            attrs['huid_no'] = None

        gross = self._current(attrs, 'gross_weight')
        net = self._current(attrs, 'net_weight')
        if gross is not None and net is not None and net > gross:
            errors['netWeight'] = 'Net weight cannot be greater than gross weight.'

        if errors:
            raise serializers.ValidationError(errors)

        if 'balance' in attrs and not attrs['balance'].strip():
            attrs['balance'] = '0'
        return attrs


class InEntryPatchSerializer(InEntryCreateSerializer):
    """
    Editable IN fields, validated against the stored entry (partial=True).
    The identity field is re-checked for the effective metal type and the
    other identity field is cleared.
    """


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

ENTRY_CREATE_SERIALIZERS = {
    KaragirEntry.EntryType.OUT: OutEntryCreateSerializer,
    KaragirEntry.EntryType.IN: InEntryCreateSerializer,
}

ENTRY_PATCH_SERIALIZERS = {
    KaragirEntry.EntryType.OUT: OutEntryPatchSerializer,
    KaragirEntry.EntryType.IN: InEntryPatchSerializer,
}


def entry_type_from_payload(data) -> str:
    """Return the requested entry type or raise a 400 on the entryType field."""
    entry_type = data.get('entryType') if isinstance(data, Mapping) else None
    if isinstance(entry_type, str) and entry_type in ENTRY_CREATE_SERIALIZERS:
        return entry_type
    raise serializers.ValidationError(
        {'entryType': 'Invalid entryType. Must be "in" or "out".'},
    )
