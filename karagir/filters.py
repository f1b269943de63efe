"""
Karagir — Filters

Query-string filters for the ledger list, named as the frontend sends
them (?entryType=out&status=pending&karagirName=Ravi).

@file karagir/filters.py
"""

import django_filters

from core.models import MetalType

from .models import KaragirEntry


class KaragirEntryFilter(django_filters.FilterSet):
    entryType = django_filters.ChoiceFilter(
        field_name='entry_type', choices=KaragirEntry.EntryType.choices,
    )
    status = django_filters.ChoiceFilter(
        field_name='status', choices=KaragirEntry.StatusChoices.choices,
    )
    metalType = django_filters.ChoiceFilter(
        field_name='metal_type', choices=MetalType.choices,
    )
    karagirName = django_filters.CharFilter(method='filter_karagir_name')

    class Meta:
        model = KaragirEntry
        fields = ['entryType', 'status', 'metalType', 'karagirName']

    def filter_karagir_name(self, queryset, name, value):
        return queryset.filter(karagir_name=value.strip().lower())
