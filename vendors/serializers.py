"""
Vendors — Serializers

Vendor representation and custom JWT token claims.

@file vendors/serializers.py
"""

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.settings import api_settings

from .models import Vendor


class VendorReadSerializer(serializers.ModelSerializer):
    shopName = serializers.CharField(source='shop_name', read_only=True)
    vendorType = serializers.CharField(source='vendor_type', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Vendor
        fields = ['id', 'shopName', 'contact', 'address', 'vendorType', 'createdAt']
        read_only_fields = fields


class VendorTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Login with {shopName, password}; injects shop_name into the JWT payload."""

    username_field = 'shopName'

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['shop_name'] = user.shop_name
        return token

    def validate(self, attrs):
        vendor = authenticate(
            request=self.context.get('request'),
            shop_name=attrs[self.username_field].strip(),
            password=attrs['password'],
        )
        if vendor is None:
            raise exceptions.AuthenticationFailed(
                'Invalid credentials or account not active.',
                code='no_active_account',
            )

        self.user = vendor
        refresh = self.get_token(vendor)
        if api_settings.UPDATE_LAST_LOGIN:
            update_last_login(None, vendor)

        return {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
            'vendor': VendorReadSerializer(vendor).data,
        }
