"""
Karagir — Service Layer

Ledger reconciliation: an OUT entry lends metal to a karagir and stays
PENDING; an IN entry returns jewellery, creates the stock item, and
closes the oldest PENDING OUT for the same (vendor, karagir, metal).
Deleting that IN entry removes its item and reopens the OUT.

Every operation runs in one transaction so the item and the ledger rows
commit or roll back together.

@file karagir/services.py
"""

import logging
from typing import Any
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_STATUS_CHANGE,
    AUDIT_ACTION_UPDATE,
)
from core.exceptions import (
    BusinessRuleViolation,
    InvalidStateTransition,
    ResourceNotFoundError,
)
from core.models import MetalType
from core.services import AuditService
from inventory.services import InventoryService

from .models import EDITABLE_FIELDS, IN_ONLY_FIELDS, OUT_ONLY_FIELDS, KaragirEntry

logger = logging.getLogger('jewelstock')

EntryType = KaragirEntry.EntryType
Status = KaragirEntry.StatusChoices

# Valid OUT status transitions: from_status -> set of allowed to_status
OUT_STATUS_TRANSITIONS = {
    Status.PENDING: {Status.COMPLETED},
    Status.COMPLETED: {Status.PENDING},
}


def _assert_transition(entry: KaragirEntry, new_status: str) -> None:
    if not entry.is_out:
        raise InvalidStateTransition(detail='Only out entries change status.')
    allowed = OUT_STATUS_TRANSITIONS.get(entry.status, set())
    if new_status not in allowed:
        raise InvalidStateTransition(
            detail=f'Cannot transition out entry from {entry.status} to {new_status}.',
        )


def _normalize_name(value: str | None) -> str:
    return (value or '').strip().lower()


_MATCH_KEY_FIELDS = {'karagir_name': 'karagirName', 'metal_type': 'metalType'}


def _assert_match_key_unchanged(entry: KaragirEntry, changes: dict[str, Any]) -> None:
    """An IN entry that closed an OUT keeps the karagir and metal it was matched on."""
    errors = {
        api_name: 'Cannot change this field on an in entry that completed an out entry.'
        for name, api_name in _MATCH_KEY_FIELDS.items()
        if name in changes and changes[name] != getattr(entry, name)
    }
    if errors:
        raise BusinessRuleViolation(detail=errors)


def _item_fields(entry: KaragirEntry) -> dict[str, Any]:
    """Fields an IN entry mirrors onto its stock item."""
    return {
        'jewellery_name': entry.jewellery_name,
        'metal_type': entry.metal_type,
        'subtype': entry.subtype,
        'gross_weight': entry.gross_weight,
        'net_weight': entry.net_weight,
        'purity': entry.purity_received,
        'labour_charge': entry.labour_charge,
        'balance': entry.balance,
        'huid_no': entry.huid_no if entry.metal_type == MetalType.GOLD else None,
        'karat_carat': '' if entry.metal_type == MetalType.GOLD else entry.karat_carat,
    }


class KaragirLedgerService:
    """Create, update and delete karagir ledger entries, keeping items and OUT statuses in step."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def entries_for(vendor) -> QuerySet:
        """All entries of a vendor, newest first."""
        return KaragirEntry.objects.filter(vendor=vendor).order_by('-created_at')

    @staticmethod
    def get_entry(*, vendor, entry_id: UUID) -> KaragirEntry:
        entry = KaragirEntry.objects.filter(pk=entry_id, vendor=vendor).first()
        if entry is None:
            raise ResourceNotFoundError(detail='Karagir entry not found.')
        return entry

    @staticmethod
    def pending_out_entries(*, vendor, karagir_name: str, metal_type: str) -> QuerySet:
        """PENDING OUT entries for a karagir and metal, oldest first."""
        return KaragirEntry.objects.filter(
            vendor=vendor,
            karagir_name=_normalize_name(karagir_name),
            metal_type=metal_type,
            entry_type=EntryType.OUT,
            status=Status.PENDING,
        ).order_by('created_at', 'id')

    @staticmethod
    def pending_out_count(*, vendor, karagir_name: str, metal_type: str) -> int:
        """Advisory count used by the frontend before recording an IN entry."""
        return KaragirLedgerService.pending_out_entries(
            vendor=vendor, karagir_name=karagir_name, metal_type=metal_type,
        ).count()

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------

    @staticmethod
    def _set_out_status(entry: KaragirEntry, new_status: str, *, actor=None) -> KaragirEntry:
        if entry.status == new_status == Status.COMPLETED:
            return entry
        _assert_transition(entry, new_status)
        old_status = entry.status
        entry.status = new_status
        entry.updated_by = actor
        entry.save(update_fields=['status', 'updated_by', 'updated_at'])
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STATUS_CHANGE,
            model_name='KaragirEntry',
            object_id=str(entry.pk),
            old_values={'status': old_status},
            new_values={'status': new_status},
        )
        logger.info('KaragirEntry %s status %s -> %s', entry.pk, old_status, new_status)
        return entry

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def create_entry(*, vendor, entry_type: str, data: dict[str, Any], actor=None) -> KaragirEntry:
        """
        Record an OUT or IN entry.

        OUT: stored PENDING. IN: stored COMPLETED with a freshly created
        item; the oldest PENDING OUT for the same karagir and metal (if
        any) is completed and referenced by completes_out_entry. A missing
        OUT does not block the IN entry.
        """
        if entry_type not in EntryType.values:
            raise BusinessRuleViolation(detail={'entryType': 'Invalid entryType. Must be "in" or "out".'})

        own_fields = OUT_ONLY_FIELDS if entry_type == EntryType.OUT else IN_ONLY_FIELDS
        entry = KaragirEntry(
            vendor=vendor,
            entry_type=entry_type,
            karagir_name=_normalize_name(data.get('karagir_name')),
            metal_type=data.get('metal_type'),
            remarks=data.get('remarks') or '',
            created_by=actor,
            **{name: data[name] for name in own_fields if name in data},
        )
        if not entry.karagir_name:
            raise BusinessRuleViolation(detail={'karagirName': 'Karagir name is required.'})

        matched_out = None
        if entry.is_out:
            entry.status = Status.PENDING
        else:
            entry.status = Status.COMPLETED
            matched_out = KaragirLedgerService.pending_out_entries(
                vendor=vendor, karagir_name=entry.karagir_name, metal_type=entry.metal_type,
            ).select_for_update().first()
            if matched_out is None:
                logger.info(
                    'No pending out entry for karagir=%s metal=%s (vendor %s); recording in entry unmatched',
                    entry.karagir_name, entry.metal_type, vendor.pk,
                )

            entry.linked_item = InventoryService.create_karagir_item(
                vendor=vendor, fields=_item_fields(entry), actor=actor,
            )
            entry.completes_out_entry = matched_out

        entry.save(force_insert=True)

        if matched_out is not None:
            KaragirLedgerService._set_out_status(matched_out, Status.COMPLETED, actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='KaragirEntry',
            object_id=str(entry.pk),
            new_values=AuditService.snapshot(entry),
        )
        logger.info(
            'KaragirEntry %s %s karagir=%s metal=%s vendor=%s completes=%s item=%s',
            entry.entry_type, entry.pk, entry.karagir_name, entry.metal_type, vendor.pk,
            entry.completes_out_entry_id, entry.linked_item_id,
        )
        return entry

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def update_entry(*, vendor, entry_id: UUID, changes: dict[str, Any], actor=None) -> KaragirEntry:
        """
        Apply a patch to an entry. Fields not editable for the entry's type
        are dropped. IN entries push the merged values to their linked item;
        a HUID collision aborts the whole update. An IN entry that completed
        an OUT cannot move to another karagir or metal.
        """
        entry = KaragirEntry.objects.select_for_update().filter(pk=entry_id, vendor=vendor).first()
        if entry is None:
            raise ResourceNotFoundError(detail='Karagir entry not found.')

        editable = EDITABLE_FIELDS[entry.entry_type]
        dropped = sorted(set(changes) - editable)
        if dropped:
            logger.debug('KaragirEntry %s update ignoring fields %s', entry.pk, dropped)
        changes = {name: value for name, value in changes.items() if name in editable}
        if 'karagir_name' in changes:
            changes['karagir_name'] = _normalize_name(changes['karagir_name'])
            if not changes['karagir_name']:
                raise BusinessRuleViolation(detail={'karagirName': 'Karagir name is required.'})
        if entry.is_in and entry.completes_out_entry_id:
            _assert_match_key_unchanged(entry, changes)

        old_values = AuditService.snapshot(entry)
        for name, value in changes.items():
            setattr(entry, name, value)

        if entry.is_in and entry.metal_type == MetalType.GOLD:
            InventoryService.assert_huid_available(entry.huid_no, exclude_item_id=entry.linked_item_id)

        entry.updated_by = actor
        entry.save()

        if entry.is_in and entry.linked_item_id:
            InventoryService.sync_item(
                item_id=entry.linked_item_id, fields=_item_fields(entry), actor=actor,
            )

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='KaragirEntry',
            object_id=str(entry.pk),
            old_values=old_values,
            new_values=AuditService.snapshot(entry),
        )
        logger.info('KaragirEntry %s updated fields=%s', entry.pk, ','.join(sorted(changes)))
        return entry

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def delete_entry(*, vendor, entry_id: UUID, actor=None) -> None:
        """
        Delete one entry.

        IN: its linked item is removed and the OUT it completed goes back
        to PENDING. OUT: IN entries that completed it lose the reference.
        """
        entry = KaragirEntry.objects.select_for_update().filter(pk=entry_id, vendor=vendor).first()
        if entry is None:
            raise ResourceNotFoundError(detail='Karagir entry not found.')

        old_values = AuditService.snapshot(entry)
        entry_pk = entry.pk
        item_id = entry.linked_item_id
        out_id = entry.completes_out_entry_id

        if entry.is_out:
            cleared = entry.completed_by_entries.update(completes_out_entry=None)
            if cleared:
                logger.warning(
                    'Deleted completed out entry %s; cleared back-reference on %s in entries',
                    entry_pk, cleared,
                )

        entry.delete()

        if entry.is_in:
            if item_id and not InventoryService.delete_item(item_id):
                logger.warning('Linked item %s of in entry %s was already deleted', item_id, entry_pk)
            if out_id:
                out_entry = KaragirEntry.objects.select_for_update().filter(pk=out_id).first()
                if out_entry is None:
                    logger.warning('Out entry %s completed by %s no longer exists', out_id, entry_pk)
                elif out_entry.status == Status.COMPLETED:
                    KaragirLedgerService._set_out_status(out_entry, Status.PENDING, actor=actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='KaragirEntry',
            object_id=str(entry_pk),
            old_values=old_values,
        )
        logger.info('KaragirEntry %s deleted (vendor %s)', entry_pk, vendor.pk)

    @staticmethod
    @transaction.atomic
    def delete_all(*, vendor, actor=None) -> int:
        """
        Delete every entry of a vendor. Items generated by IN entries go
        first. Returns the number of ledger entries removed.
        """
        entries = KaragirEntry.objects.filter(vendor=vendor)
        item_ids = list(
            entries.filter(entry_type=EntryType.IN, linked_item__isnull=False)
            .values_list('linked_item_id', flat=True),
        )
        items_deleted = InventoryService.delete_items(item_ids)

        _, per_model = entries.delete()
        deleted_count = per_model.get(KaragirEntry._meta.label, 0)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='KaragirEntry',
            object_id=str(vendor.pk),
            old_values={'entries': deleted_count, 'items': items_deleted},
        )
        logger.info(
            'Deleted %s karagir entries and %s items for vendor %s',
            deleted_count, items_deleted, vendor.pk,
        )
        return deleted_count
