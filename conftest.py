"""
Jewellery Stock — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from rest_framework.test import APIClient

from tests.factories import SuperuserFactory, VendorFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def vendor(db):
    """Active vendor with default password TestPass2026!"""
    return VendorFactory()


@pytest.fixture
def other_vendor(db):
    """A second shop, for cross-vendor isolation checks."""
    return VendorFactory()


@pytest.fixture
def admin_user(db):
    """Superuser with default password TestPass2026!"""
    return SuperuserFactory()


@pytest.fixture
def vendor_client(api_client, vendor):
    """API client authenticated as ``vendor``."""
    api_client.force_authenticate(user=vendor)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    """API client authenticated as a superuser."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
