"""
Core — Audit Service

Writes AuditLog rows for ledger writes and vendor auth events.

@file core/services.py
"""

import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.forms.models import model_to_dict

from core.models import AuditLog


class AuditService:
    """One entry point for every audit row the shop records."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str = '',
    ) -> AuditLog:
        return AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    @staticmethod
    def log_request(request, *, actor, action: str, model_name: str, object_id) -> AuditLog:
        """Audit an event triggered by an HTTP request, keeping its origin."""
        return AuditService.log(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=object_id,
            ip_address=AuditService.get_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
        )

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """
        Editable columns of ``instance`` as JSON-ready values: decimals and
        UUIDs become strings, foreign keys their primary key.
        """
        return json.loads(json.dumps(model_to_dict(instance, fields=fields), cls=DjangoJSONEncoder))

    @staticmethod
    def get_client_ip(request) -> str | None:
        forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
        return forwarded.split(',')[0].strip() or request.META.get('REMOTE_ADDR')
