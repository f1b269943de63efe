"""
Vendors — Views

Auth endpoints: login, refresh, logout, me.

@file vendors/views.py
"""

import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.constants import AUDIT_ACTION_LOGIN, AUDIT_ACTION_LOGOUT
from core.services import AuditService

from .serializers import VendorReadSerializer, VendorTokenObtainPairSerializer

logger = logging.getLogger('jewelstock')


def _log_auth_event(request, *, action, vendor):
    AuditService.log_request(
        request, actor=vendor, action=action, model_name='Vendor', object_id=vendor.pk,
    )


class LoginView(TokenObtainPairView):
    """POST /v1/auth/login — Authenticate and obtain JWT pair."""
    serializer_class = VendorTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        _log_auth_event(request, action=AUDIT_ACTION_LOGIN, vendor=serializer.user)
        logger.info('Vendor %s logged in', serializer.user.pk)
        return Response(serializer.validated_data)


class LogoutView(APIView):
    """POST /v1/auth/logout — Blacklist the refresh token."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        refresh_token = request.data.get('refresh')
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as exc:
                logger.warning('Logout for vendor %s with unusable refresh token: %s', request.user.pk, exc)

        _log_auth_event(request, action=AUDIT_ACTION_LOGOUT, vendor=request.user)
        return Response({'message': 'Logged out.'}, status=status.HTTP_200_OK)


class TokenRefreshAPIView(TokenRefreshView):
    """POST /v1/auth/refresh — Rotate refresh token."""
    pass


class MeView(APIView):
    """GET /v1/auth/me — Return the current authenticated vendor."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(VendorReadSerializer(request.user).data)
