"""
Inventory — Service Layer

Item writes issued by the karagir ledger: create an item from an "in"
entry, mirror later edits onto it, and remove it when the entry goes.
Gold HUID uniqueness is checked here and translated to a 409 when the
database constraint catches a concurrent duplicate.

@file inventory/services.py
"""

import logging
from typing import Any
from uuid import UUID

from django.db import IntegrityError, transaction

from core.exceptions import DuplicateResourceError
from core.models import MetalType

from .models import Item

logger = logging.getLogger('jewelstock')

# Fields an "in" ledger entry mirrors onto its item.
MIRRORED_FIELDS = (
    'jewellery_name', 'metal_type', 'subtype', 'gross_weight', 'net_weight',
    'purity', 'labour_charge', 'balance', 'huid_no', 'karat_carat',
)


def _duplicate_huid(huid_no: str) -> DuplicateResourceError:
    return DuplicateResourceError(
        detail={'huidNo': f'HUID {huid_no} is already assigned to another gold item.'},
    )


class InventoryService:
    """Item persistence on behalf of the karagir ledger."""

    @staticmethod
    def huid_in_use(huid_no: str, *, exclude_item_id: UUID | None = None) -> bool:
        qs = Item.objects.filter(metal_type=MetalType.GOLD, huid_no=huid_no)
        if exclude_item_id is not None:
            qs = qs.exclude(pk=exclude_item_id)
        return qs.exists()

    @staticmethod
    def assert_huid_available(huid_no: str | None, *, exclude_item_id: UUID | None = None) -> None:
        """Raise DuplicateResourceError if a gold item already carries huid_no."""
        if huid_no and InventoryService.huid_in_use(huid_no, exclude_item_id=exclude_item_id):
            raise _duplicate_huid(huid_no)

    @staticmethod
    def _save(item: Item, **save_kwargs) -> None:
        try:
            with transaction.atomic():
                item.save(**save_kwargs)
        except IntegrityError:
            if item.metal_type == MetalType.GOLD and item.huid_no and InventoryService.huid_in_use(
                item.huid_no, exclude_item_id=item.pk,
            ):
                raise _duplicate_huid(item.huid_no)
            raise

    @staticmethod
    def create_karagir_item(*, vendor, fields: dict[str, Any], actor=None) -> Item:
        """Create a stock item generated by a karagir "in" entry."""
        if fields.get('metal_type') == MetalType.GOLD:
            InventoryService.assert_huid_available(fields.get('huid_no'))

        item = Item(
            vendor=vendor,
            source_type=Item.SourceType.KARAGIR,
            created_by=actor,
            **{name: fields[name] for name in MIRRORED_FIELDS if name in fields},
        )
        InventoryService._save(item, force_insert=True)
        logger.info('Item %s created from karagir entry for vendor %s', item.pk, vendor.pk)
        return item

    @staticmethod
    def sync_item(*, item_id: UUID, fields: dict[str, Any], actor=None) -> Item | None:
        """
        Push mirrored ledger fields onto an existing item. Returns None when
        the item no longer exists.
        """
        item = Item.objects.select_for_update().filter(pk=item_id).first()
        if item is None:
            logger.warning('Linked item %s missing; nothing to sync', item_id)
            return None

        changed = []
        for name in MIRRORED_FIELDS:
            if name in fields and getattr(item, name) != fields[name]:
                setattr(item, name, fields[name])
                changed.append(name)
        if not changed:
            return item

        if item.metal_type == MetalType.GOLD:
            InventoryService.assert_huid_available(item.huid_no, exclude_item_id=item.pk)

        item.updated_by = actor
        InventoryService._save(item, update_fields=[*changed, 'updated_by', 'updated_at'])
        logger.info('Item %s synced fields=%s', item.pk, ','.join(changed))
        return item

    @staticmethod
    def delete_item(item_id: UUID) -> bool:
        """Delete one item. Returns False if it was already gone."""
        deleted, _ = Item.objects.filter(pk=item_id).delete()
        return bool(deleted)

    @staticmethod
    def delete_items(item_ids) -> int:
        ids = [pk for pk in item_ids if pk is not None]
        if not ids:
            return 0
        deleted, _ = Item.objects.filter(pk__in=ids).delete()
        return deleted
