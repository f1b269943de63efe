"""
Karagir — Model tests: entry type helpers and database constraints.

@file karagir/tests/test_models.py
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from karagir.models import EDITABLE_FIELDS, IN_ONLY_FIELDS, OUT_ONLY_FIELDS, KaragirEntry
from tests.factories import InEntryFactory, OutEntryFactory


pytestmark = pytest.mark.django_db


class TestKaragirEntry:
    def test_out_entry_helpers(self):
        entry = OutEntryFactory()
        assert entry.is_out
        assert not entry.is_in
        assert str(entry) == 'OUT ravi gold [pending]'

    def test_in_entry_owns_item(self):
        entry = InEntryFactory()
        assert entry.is_in
        assert entry.linked_item.karagir_entry == entry
        assert entry.linked_item.huid_no == entry.huid_no

    def test_transaction_ids_are_distinct(self):
        first, second = OutEntryFactory.create_batch(2)
        assert first.transaction_id != second.transaction_id

    def test_in_entry_cannot_be_pending(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            InEntryFactory(status=KaragirEntry.StatusChoices.PENDING)

    def test_grams_given_non_negative(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            OutEntryFactory(grams_given=Decimal('-1'))

    def test_deleting_item_keeps_entry(self):
        entry = InEntryFactory()
        entry.linked_item.delete()
        entry.refresh_from_db()
        assert entry.linked_item_id is None


class TestEditableFields:
    def test_types_do_not_share_own_fields(self):
        out_fields = EDITABLE_FIELDS[KaragirEntry.EntryType.OUT]
        in_fields = EDITABLE_FIELDS[KaragirEntry.EntryType.IN]
        assert not out_fields & set(IN_ONLY_FIELDS)
        assert not in_fields & set(OUT_ONLY_FIELDS)

    @pytest.mark.parametrize('name', [
        'vendor', 'entry_type', 'transaction_id', 'status', 'linked_item', 'completes_out_entry', 'created_at',
    ])
    def test_server_owned_fields_not_editable(self, name):
        for editable in EDITABLE_FIELDS.values():
            assert name not in editable
