"""
Tests — KaragirLedgerService: out/in reconciliation, item generation,
update propagation, and delete cascades.

@file karagir/tests/test_services.py
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from core.exceptions import (
    BusinessRuleViolation,
    DuplicateResourceError,
    InvalidStateTransition,
    ResourceNotFoundError,
)
from core.models import AuditLog, MetalType
from inventory.models import Item
from karagir.models import KaragirEntry
from karagir.services import KaragirLedgerService
from tests.factories import InEntryFactory, ItemFactory, OutEntryFactory, VendorFactory


pytestmark = pytest.mark.django_db

OUT = KaragirEntry.EntryType.OUT
IN = KaragirEntry.EntryType.IN
PENDING = KaragirEntry.StatusChoices.PENDING
COMPLETED = KaragirEntry.StatusChoices.COMPLETED


def _out_data(**overrides):
    data = {
        'karagir_name': 'Ravi',
        'metal_type': MetalType.GOLD,
        'grams_given': Decimal('10'),
        'purity_given': '24k',
    }
    data.update(overrides)
    return data


def _in_data(**overrides):
    data = {
        'karagir_name': 'ravi',
        'metal_type': MetalType.GOLD,
        'jewellery_name': 'ring',
        'subtype': 'regular gold jewellery',
        'huid_no': 'AB12CD',
        'karat_carat': '',
        'gross_weight': Decimal('5'),
        'net_weight': Decimal('4.8'),
        'purity_received': '22k',
        'labour_charge': Decimal('100'),
        'balance': '0',
    }
    data.update(overrides)
    return data


def _create(vendor, entry_type, data):
    return KaragirLedgerService.create_entry(
        vendor=vendor, entry_type=entry_type, data=data, actor=vendor,
    )


class TestCreateEntry:
    def test_out_entry_is_pending(self):
        vendor = VendorFactory()
        entry = _create(vendor, OUT, _out_data())
        assert entry.status == PENDING
        assert entry.karagir_name == 'ravi'
        assert entry.linked_item_id is None

    def test_in_entry_without_out_is_completed(self):
        vendor = VendorFactory()
        entry = _create(vendor, IN, _in_data())
        assert entry.status == COMPLETED
        assert entry.completes_out_entry_id is None
        assert entry.linked_item_id is not None

    def test_in_entry_completes_pending_out(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data())
        entry = _create(vendor, IN, _in_data())
        out.refresh_from_db()
        assert out.status == COMPLETED
        assert entry.completes_out_entry_id == out.pk

    def test_in_entry_creates_item(self):
        vendor = VendorFactory()
        entry = _create(vendor, IN, _in_data(purity_received='22k'))
        item = Item.objects.get(pk=entry.linked_item_id)
        assert item.vendor == vendor
        assert item.source_type == Item.SourceType.KARAGIR
        assert item.huid_no == 'AB12CD'
        assert item.purity == '22k'
        assert item.net_weight == Decimal('4.8')

    def test_oldest_pending_out_is_matched(self):
        vendor = VendorFactory()
        newer = _create(vendor, OUT, _out_data())
        older = _create(vendor, OUT, _out_data())
        KaragirEntry.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=2))
        KaragirEntry.objects.filter(pk=newer.pk).update(created_at=timezone.now() - timedelta(days=1))

        entry = _create(vendor, IN, _in_data())

        older.refresh_from_db()
        newer.refresh_from_db()
        assert entry.completes_out_entry_id == older.pk
        assert older.status == COMPLETED
        assert newer.status == PENDING

    def test_matching_ignores_other_metal_and_vendor(self):
        vendor = VendorFactory()
        silver_out = _create(vendor, OUT, _out_data(metal_type=MetalType.SILVER))
        foreign_out = _create(VendorFactory(), OUT, _out_data())
        entry = _create(vendor, IN, _in_data())
        silver_out.refresh_from_db()
        foreign_out.refresh_from_db()
        assert entry.completes_out_entry_id is None
        assert silver_out.status == PENDING
        assert foreign_out.status == PENDING

    def test_karagir_name_matches_case_insensitively(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data(karagir_name='  RAVI '))
        assert KaragirLedgerService.pending_out_count(
            vendor=vendor, karagir_name='Ravi', metal_type=MetalType.GOLD,
        ) == 1
        entry = _create(vendor, IN, _in_data(karagir_name='ravi'))
        assert entry.completes_out_entry_id == out.pk

    def test_duplicate_huid_persists_nothing(self):
        vendor = VendorFactory()
        _create(vendor, IN, _in_data(huid_no='AB12CD'))
        out = _create(vendor, OUT, _out_data())
        entries_before = KaragirEntry.objects.count()
        items_before = Item.objects.count()

        with pytest.raises(DuplicateResourceError):
            _create(vendor, IN, _in_data(huid_no='AB12CD'))

        out.refresh_from_db()
        assert KaragirEntry.objects.count() == entries_before
        assert Item.objects.count() == items_before
        assert out.status == PENDING

    def test_duplicate_huid_across_vendors(self):
        ItemFactory(huid_no='AB12CD')
        with pytest.raises(DuplicateResourceError):
            _create(VendorFactory(), IN, _in_data(huid_no='AB12CD'))

    def test_invalid_entry_type(self):
        with pytest.raises(BusinessRuleViolation):
            _create(VendorFactory(), 'sideways', _out_data())

    def test_blank_karagir_name(self):
        with pytest.raises(BusinessRuleViolation):
            _create(VendorFactory(), OUT, _out_data(karagir_name='   '))

    def test_other_type_fields_are_not_stored(self):
        vendor = VendorFactory()
        entry = _create(vendor, OUT, _out_data(jewellery_name='ring', huid_no='AB12CD'))
        assert entry.jewellery_name == ''
        assert entry.huid_no is None

    def test_create_is_audited(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data())
        _create(vendor, IN, _in_data())
        logs = AuditLog.objects.filter(model_name='KaragirEntry', object_id=str(out.pk))
        assert logs.filter(action=AuditLog.ActionChoices.CREATE).exists()
        assert logs.filter(action=AuditLog.ActionChoices.STATUS_CHANGE).exists()


class TestPendingOut:
    def test_count_only_pending(self):
        vendor = VendorFactory()
        OutEntryFactory(vendor=vendor)
        OutEntryFactory(vendor=vendor)
        OutEntryFactory(vendor=vendor, status=COMPLETED)
        assert KaragirLedgerService.pending_out_count(
            vendor=vendor, karagir_name='ravi', metal_type=MetalType.GOLD,
        ) == 2

    def test_zero_for_unknown_karagir(self):
        assert KaragirLedgerService.pending_out_count(
            vendor=VendorFactory(), karagir_name='mohan', metal_type=MetalType.GOLD,
        ) == 0


class TestStatusTransitions:
    def test_in_entry_has_no_transitions(self):
        entry = InEntryFactory()
        with pytest.raises(InvalidStateTransition):
            KaragirLedgerService._set_out_status(entry, PENDING)

    def test_pending_to_pending_rejected(self):
        entry = OutEntryFactory()
        with pytest.raises(InvalidStateTransition):
            KaragirLedgerService._set_out_status(entry, PENDING)

    def test_completed_to_completed_is_noop(self):
        entry = OutEntryFactory(status=COMPLETED)
        KaragirLedgerService._set_out_status(entry, COMPLETED)
        assert not AuditLog.objects.filter(action=AuditLog.ActionChoices.STATUS_CHANGE).exists()


class TestUpdateEntry:
    def test_out_update_strips_in_only_fields(self):
        entry = OutEntryFactory()
        updated = KaragirLedgerService.update_entry(
            vendor=entry.vendor,
            entry_id=entry.pk,
            changes={'jewellery_name': 'ring', 'grams_given': Decimal('12.5'), 'status': COMPLETED},
        )
        entry.refresh_from_db()
        assert updated.jewellery_name == ''
        assert entry.jewellery_name == ''
        assert entry.grams_given == Decimal('12.5')
        assert entry.status == PENDING

    def test_in_update_strips_out_only_and_links(self):
        entry = InEntryFactory()
        item_id = entry.linked_item_id
        KaragirLedgerService.update_entry(
            vendor=entry.vendor,
            entry_id=entry.pk,
            changes={'grams_given': Decimal('3'), 'linked_item': None, 'labour_charge': Decimal('250')},
        )
        entry.refresh_from_db()
        assert entry.grams_given is None
        assert entry.linked_item_id == item_id
        assert entry.labour_charge == Decimal('250')

    def test_in_update_propagates_to_item(self):
        vendor = VendorFactory()
        entry = _create(vendor, IN, _in_data())
        KaragirLedgerService.update_entry(
            vendor=vendor,
            entry_id=entry.pk,
            changes={'jewellery_name': 'necklace', 'purity_received': '18k', 'huid_no': 'XY98ZW'},
        )
        item = Item.objects.get(pk=entry.linked_item_id)
        assert item.jewellery_name == 'necklace'
        assert item.purity == '18k'
        assert item.huid_no == 'XY98ZW'

    def test_in_update_keeping_own_huid(self):
        vendor = VendorFactory()
        entry = _create(vendor, IN, _in_data(huid_no='AB12CD'))
        updated = KaragirLedgerService.update_entry(
            vendor=vendor, entry_id=entry.pk, changes={'huid_no': 'AB12CD', 'balance': '2g due'},
        )
        assert updated.balance == '2g due'

    def test_in_update_huid_conflict_aborts(self):
        vendor = VendorFactory()
        ItemFactory(huid_no='TAKEN1')
        entry = _create(vendor, IN, _in_data(huid_no='AB12CD'))
        with pytest.raises(DuplicateResourceError):
            KaragirLedgerService.update_entry(
                vendor=vendor,
                entry_id=entry.pk,
                changes={'huid_no': 'TAKEN1', 'jewellery_name': 'chain'},
            )
        entry.refresh_from_db()
        assert entry.huid_no == 'AB12CD'
        assert entry.jewellery_name == 'ring'
        assert Item.objects.get(pk=entry.linked_item_id).huid_no == 'AB12CD'

    def test_in_update_to_silver_clears_item_huid(self):
        vendor = VendorFactory()
        entry = _create(vendor, IN, _in_data())
        KaragirLedgerService.update_entry(
            vendor=vendor,
            entry_id=entry.pk,
            changes={
                'metal_type': MetalType.SILVER,
                'subtype': 'regular silver jewellery',
                'karat_carat': '925',
                'huid_no': None,
            },
        )
        item = Item.objects.get(pk=entry.linked_item_id)
        assert item.metal_type == MetalType.SILVER
        assert item.huid_no is None
        assert item.karat_carat == '925'

    def test_update_with_missing_item_still_saves(self):
        entry = InEntryFactory()
        Item.objects.filter(pk=entry.linked_item_id).delete()
        updated = KaragirLedgerService.update_entry(
            vendor=entry.vendor, entry_id=entry.pk, changes={'remarks': 'item sold'},
        )
        assert updated.remarks == 'item sold'

    def test_update_normalizes_karagir_name(self):
        entry = OutEntryFactory()
        updated = KaragirLedgerService.update_entry(
            vendor=entry.vendor, entry_id=entry.pk, changes={'karagir_name': ' Mohan '},
        )
        assert updated.karagir_name == 'mohan'

    def test_matched_in_keeps_karagir_and_metal(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data())
        entry = _create(vendor, IN, _in_data())
        with pytest.raises(BusinessRuleViolation):
            KaragirLedgerService.update_entry(
                vendor=vendor, entry_id=entry.pk, changes={'karagir_name': 'Mohan'},
            )
        with pytest.raises(BusinessRuleViolation):
            KaragirLedgerService.update_entry(
                vendor=vendor,
                entry_id=entry.pk,
                changes={'metal_type': MetalType.SILVER, 'karat_carat': '925'},
            )
        entry.refresh_from_db()
        assert entry.karagir_name == 'ravi'
        assert entry.metal_type == MetalType.GOLD
        assert entry.completes_out_entry_id == out.pk

    def test_matched_in_accepts_same_karagir_spelling(self):
        vendor = VendorFactory()
        _create(vendor, OUT, _out_data())
        entry = _create(vendor, IN, _in_data())
        updated = KaragirLedgerService.update_entry(
            vendor=vendor, entry_id=entry.pk, changes={'karagir_name': ' RAVI ', 'remarks': 'checked'},
        )
        assert updated.remarks == 'checked'

    def test_unmatched_in_can_change_karagir(self):
        vendor = VendorFactory()
        entry = _create(vendor, IN, _in_data())
        updated = KaragirLedgerService.update_entry(
            vendor=vendor, entry_id=entry.pk, changes={'karagir_name': 'Mohan'},
        )
        assert updated.karagir_name == 'mohan'

    def test_update_other_vendor_not_found(self):
        entry = OutEntryFactory()
        with pytest.raises(ResourceNotFoundError):
            KaragirLedgerService.update_entry(
                vendor=VendorFactory(), entry_id=entry.pk, changes={'remarks': 'x'},
            )

    def test_update_is_audited(self):
        entry = OutEntryFactory()
        KaragirLedgerService.update_entry(
            vendor=entry.vendor, entry_id=entry.pk, changes={'purity_given': '22k'},
        )
        log = AuditLog.objects.get(action=AuditLog.ActionChoices.UPDATE, object_id=str(entry.pk))
        assert log.old_values['purity_given'] == '24k'
        assert log.new_values['purity_given'] == '22k'


class TestDeleteEntry:
    def test_deleting_in_reverts_out_and_removes_item(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data())
        entry = _create(vendor, IN, _in_data())
        item_id = entry.linked_item_id

        KaragirLedgerService.delete_entry(vendor=vendor, entry_id=entry.pk, actor=vendor)

        out.refresh_from_db()
        assert out.status == PENDING
        assert not Item.objects.filter(pk=item_id).exists()
        assert not KaragirEntry.objects.filter(pk=entry.pk).exists()

    def test_reverted_out_can_be_matched_again(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data())
        first = _create(vendor, IN, _in_data(huid_no='AAA111'))
        KaragirLedgerService.delete_entry(vendor=vendor, entry_id=first.pk)
        second = _create(vendor, IN, _in_data(huid_no='AAA111'))
        assert second.completes_out_entry_id == out.pk

    def test_deleting_in_with_missing_item(self):
        entry = InEntryFactory()
        Item.objects.filter(pk=entry.linked_item_id).delete()
        KaragirLedgerService.delete_entry(vendor=entry.vendor, entry_id=entry.pk)
        assert not KaragirEntry.objects.filter(pk=entry.pk).exists()

    def test_deleting_out_clears_back_reference(self):
        vendor = VendorFactory()
        out = _create(vendor, OUT, _out_data())
        entry = _create(vendor, IN, _in_data())

        KaragirLedgerService.delete_entry(vendor=vendor, entry_id=out.pk)

        entry.refresh_from_db()
        assert entry.completes_out_entry_id is None
        assert entry.status == COMPLETED
        assert Item.objects.filter(pk=entry.linked_item_id).exists()

    def test_delete_other_vendor_not_found(self):
        entry = OutEntryFactory()
        with pytest.raises(ResourceNotFoundError):
            KaragirLedgerService.delete_entry(vendor=VendorFactory(), entry_id=entry.pk)
        assert KaragirEntry.objects.filter(pk=entry.pk).exists()

    def test_delete_is_audited(self):
        entry = OutEntryFactory()
        KaragirLedgerService.delete_entry(vendor=entry.vendor, entry_id=entry.pk)
        assert AuditLog.objects.filter(
            action=AuditLog.ActionChoices.DELETE, object_id=str(entry.pk),
        ).exists()


class TestDeleteAll:
    def test_removes_items_and_entries(self):
        vendor = VendorFactory()
        _create(vendor, OUT, _out_data())
        _create(vendor, OUT, _out_data())
        for huid in ('AAA111', 'BBB222', 'CCC333'):
            _create(vendor, IN, _in_data(huid_no=huid))
        manual = ItemFactory(vendor=vendor)

        deleted = KaragirLedgerService.delete_all(vendor=vendor, actor=vendor)

        assert deleted == 5
        assert not KaragirEntry.objects.filter(vendor=vendor).exists()
        assert list(Item.objects.filter(vendor=vendor)) == [manual]

    def test_leaves_other_vendors_alone(self):
        vendor = VendorFactory()
        other = InEntryFactory()
        InEntryFactory(vendor=vendor)

        assert KaragirLedgerService.delete_all(vendor=vendor) == 1
        assert KaragirEntry.objects.filter(pk=other.pk).exists()
        assert Item.objects.filter(pk=other.linked_item_id).exists()

    def test_empty_ledger(self):
        assert KaragirLedgerService.delete_all(vendor=VendorFactory()) == 0
