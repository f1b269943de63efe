"""
Inventory — Item model constraint tests.

@file inventory/tests/test_models.py
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from core.models import MetalType
from tests.factories import ItemFactory


pytestmark = pytest.mark.django_db


class TestItemConstraints:
    def test_gold_huid_unique_across_vendors(self):
        ItemFactory(huid_no='AB12CD')
        with pytest.raises(IntegrityError), transaction.atomic():
            ItemFactory(huid_no='AB12CD')

    def test_non_gold_items_do_not_claim_huid(self):
        ItemFactory(metal_type=MetalType.SILVER, huid_no='ZZ9999', karat_carat='925')
        ItemFactory(metal_type=MetalType.SILVER, huid_no='ZZ9999', karat_carat='925')

    def test_gold_items_without_huid_coexist(self):
        ItemFactory(huid_no=None)
        ItemFactory(huid_no=None)

    def test_net_weight_cannot_exceed_gross(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            ItemFactory(gross_weight=Decimal('4.000'), net_weight=Decimal('4.500'))

    def test_str(self):
        item = ItemFactory(jewellery_name='Bangle')
        assert str(item) == 'Bangle (gold)'
