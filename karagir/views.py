"""
Karagir — Views

DRF ViewSet for the karagir ledger: list/retrieve/create/update/delete,
the advisory pending-out check, and vendor-wide delete-all. Every query is
scoped to the authenticated vendor.

@file karagir/views.py
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vendors.permissions import IsActiveVendor

from .filters import KaragirEntryFilter
from .serializers import (
    ENTRY_CREATE_SERIALIZERS,
    ENTRY_PATCH_SERIALIZERS,
    KaragirEntryReadSerializer,
    PendingOutQuerySerializer,
    entry_type_from_payload,
)
from .services import KaragirLedgerService


class KaragirEntryViewSet(viewsets.GenericViewSet):
    """
    Karagir ledger entries of the current vendor.
    OUT entries stay pending until an IN entry for the same karagir and
    metal closes them.
    """

    permission_classes = [IsActiveVendor]
    serializer_class = KaragirEntryReadSerializer
    filterset_class = KaragirEntryFilter
    ordering_fields = ['created_at']
    ordering = ['-created_at']
    search_fields = ['karagir_name', 'jewellery_name', 'huid_no']

    def get_queryset(self):
        return KaragirLedgerService.entries_for(self.request.user)

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        return Response(KaragirEntryReadSerializer(queryset, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(KaragirEntryReadSerializer(self.get_object()).data)

    def create(self, request):
        entry_type = entry_type_from_payload(request.data)
        serializer = ENTRY_CREATE_SERIALIZERS[entry_type](data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = KaragirLedgerService.create_entry(
            vendor=request.user,
            entry_type=entry_type,
            data=serializer.validated_data,
            actor=request.user,
        )
        return Response(KaragirEntryReadSerializer(entry).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        entry = self.get_object()
        serializer = ENTRY_PATCH_SERIALIZERS[entry.entry_type](
            entry, data=request.data, partial=True,
        )
        serializer.is_valid(raise_exception=True)
        updated = KaragirLedgerService.update_entry(
            vendor=request.user,
            entry_id=entry.pk,
            changes=serializer.validated_data,
            actor=request.user,
        )
        return Response(KaragirEntryReadSerializer(updated).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        entry = self.get_object()
        KaragirLedgerService.delete_entry(vendor=request.user, entry_id=entry.pk, actor=request.user)
        return Response({'message': 'Karagir entry deleted successfully.'}, status=status.HTTP_200_OK)

    def destroy_all(self, request):
        deleted = KaragirLedgerService.delete_all(vendor=request.user, actor=request.user)
        return Response({'deletedCount': deleted}, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='pending-out')
    def pending_out(self, request):
        query = PendingOutQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        count = KaragirLedgerService.pending_out_count(
            vendor=request.user,
            karagir_name=query.validated_data['karagir_name'],
            metal_type=query.validated_data['metal_type'],
        )
        return Response({'hasPending': count > 0, 'count': count})
