"""
Tests — InventoryService: karagir item creation, sync, deletion and
global gold HUID uniqueness.

@file inventory/tests/test_services.py
"""

from decimal import Decimal

import pytest

from core.exceptions import DuplicateResourceError
from core.models import MetalType
from inventory.models import Item
from inventory.services import InventoryService
from tests.factories import ItemFactory, VendorFactory


pytestmark = pytest.mark.django_db


def _gold_fields(**overrides):
    fields = {
        'jewellery_name': 'ring',
        'metal_type': MetalType.GOLD,
        'subtype': 'regular gold jewellery',
        'gross_weight': Decimal('5.000'),
        'net_weight': Decimal('4.800'),
        'purity': '22k',
        'labour_charge': Decimal('100.00'),
        'balance': '0',
        'huid_no': 'AB12CD',
        'karat_carat': '',
    }
    fields.update(overrides)
    return fields


class TestCreateKaragirItem:
    def test_creates_karagir_sourced_item(self):
        vendor = VendorFactory()
        item = InventoryService.create_karagir_item(vendor=vendor, fields=_gold_fields(), actor=vendor)
        assert item.source_type == Item.SourceType.KARAGIR
        assert item.vendor == vendor
        assert item.huid_no == 'AB12CD'
        assert item.is_active

    def test_duplicate_huid_other_vendor(self):
        ItemFactory(huid_no='AB12CD')
        with pytest.raises(DuplicateResourceError):
            InventoryService.create_karagir_item(vendor=VendorFactory(), fields=_gold_fields())
        assert Item.objects.count() == 1

    def test_silver_ignores_huid_check(self):
        ItemFactory(huid_no='AB12CD')
        item = InventoryService.create_karagir_item(
            vendor=VendorFactory(),
            fields=_gold_fields(metal_type=MetalType.SILVER, huid_no=None, karat_carat='925'),
        )
        assert item.karat_carat == '925'


class TestSyncItem:
    def test_pushes_changed_fields(self):
        item = ItemFactory(huid_no='AB12CD')
        synced = InventoryService.sync_item(
            item_id=item.pk, fields=_gold_fields(jewellery_name='necklace', huid_no='AB12CD'),
        )
        item.refresh_from_db()
        assert synced.pk == item.pk
        assert item.jewellery_name == 'necklace'

    def test_own_huid_is_not_a_conflict(self):
        item = ItemFactory(huid_no='AB12CD')
        InventoryService.sync_item(item_id=item.pk, fields={'huid_no': 'AB12CD', 'balance': '5'})
        item.refresh_from_db()
        assert item.balance == '5'

    def test_conflicting_huid(self):
        ItemFactory(huid_no='TAKEN1')
        item = ItemFactory(huid_no='AB12CD')
        with pytest.raises(DuplicateResourceError):
            InventoryService.sync_item(item_id=item.pk, fields={'huid_no': 'TAKEN1'})
        item.refresh_from_db()
        assert item.huid_no == 'AB12CD'

    def test_missing_item_returns_none(self):
        item = ItemFactory()
        item_id = item.pk
        item.delete()
        assert InventoryService.sync_item(item_id=item_id, fields=_gold_fields()) is None


class TestDeleteItems:
    def test_delete_item(self):
        item = ItemFactory()
        assert InventoryService.delete_item(item.pk) is True
        assert InventoryService.delete_item(item.pk) is False

    def test_delete_items_skips_none(self):
        items = ItemFactory.create_batch(3)
        assert InventoryService.delete_items([items[0].pk, None, items[1].pk]) == 2
        assert Item.objects.count() == 1

    def test_delete_items_empty(self):
        assert InventoryService.delete_items([]) == 0
