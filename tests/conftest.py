import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from purchase_tool.engine.models import Coupon, Package
from purchase_tool.gateway import FakeCatalogGateway

# Tests depend on these values.
WELLCHECK = {
    "id": 1,
    "code": "wellcheck",
    "name": "Baseline",
    "description": "Get started with WellnessFX",
    "active": True,
    "cost_in_cents": 14900,
    "created_at": "2012-05-29T17:25:52Z",
    "updated_at": "2012-05-29T17:25:52Z",
    "variants": [
        {"name": "Vitamin D", "cost_in_cents": 4000, "code": "vitamin_d", "default": False},
        {"name": "Vitamin B", "cost_in_cents": 1000, "code": "vitamin_b", "default": False},
    ],
}

CONSULT_VARIANTS = [
    {"name": "Physician Consult (30 min)", "cost_in_cents": 5000, "code": "consult.physician.30", "default": True},
    {"name": "Physician Consult (45 min)", "cost_in_cents": 7500, "code": "consult.physician.45", "default": False},
    {"name": "Physician Consult (60 min)", "cost_in_cents": 10000, "code": "consult.physician.60", "default": False},
    {"name": "Vitamin D", "cost_in_cents": 4000, "code": "vitamin_d", "default": False},
]

PREMIUM = {
    "code": "premium",
    "name": "Premium",
    "description": "Baseline plus a physician consult",
    "active": True,
    "configurable": True,
    "cost_in_cents": 29900,
    "variants": CONSULT_VARIANTS,
}

BASE_PACKAGE = {
    "code": "base_package",
    "name": "Upgrades",
    "description": "Upgrade an existing purchase",
    "active": False,
    "cost_in_cents": 0,
    "variants": [dict(v, default=False) for v in CONSULT_VARIANTS],
}

COUPON = {
    "code": "test",
    "created_at": "2012-05-29T20:31:22Z",
    "description": "Test coupon",
    "discount_in_cents": 1500,
    "id": 1,
    "organization": "",
    "product_key": "wellcheck",
    "updated_at": "2012-05-29T20:31:22Z",
}


@pytest.fixture
def mock_package():
    return Package.from_dict(WELLCHECK)


@pytest.fixture
def premium_package():
    return Package.from_dict(PREMIUM)


@pytest.fixture
def mock_coupon():
    return Coupon.from_dict(COUPON)


@pytest.fixture
def gateway(mock_package, premium_package):
    """In-memory gateway holding the test packages and the test coupon."""
    fake = FakeCatalogGateway([mock_package, premium_package, Package.from_dict(BASE_PACKAGE)])
    fake.mock_coupon(**COUPON)
    return fake
