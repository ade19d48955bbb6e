"""
In-memory catalog gateway for tests, demos and offline development.

Packages are registered directly; coupons are registered with
``mock_coupon``. A coupon registered without a product_key or organization
matches any value of that field, mirroring the remote lookup's filters.
"""
from typing import Optional

from ..engine.errors import PackageNotAvailableInState, PackageNotFound
from ..engine.models import Coupon, Package
from .base import CouponLookup


class FakeCatalogGateway:
    """Catalog gateway backed by dictionaries instead of HTTP."""

    def __init__(self, packages: Optional[list[Package]] = None):
        self.packages: dict[str, Package] = {}
        self.coupons: list[Coupon] = []
        self.unavailable: dict[str, set[str]] = {}
        self.coupon_lookups: list[tuple] = []
        for package in packages or []:
            self.add_package(package)

    def add_package(self, package: Package) -> Package:
        self.packages[package.code] = package
        return package

    def unavailable_in(self, package_code: str, state: str):
        """Mark a package as not sold in a state."""
        self.unavailable.setdefault(package_code, set()).add(state)

    def mock_coupon(self, **details) -> Coupon:
        """Register a coupon; accepts the same fields as a coupon record."""
        details.setdefault('discount_in_cents', 0)
        coupon = Coupon.from_dict(details)
        self.coupons.append(coupon)
        return coupon

    def clear_coupons(self):
        self.coupons = []

    def resolve_package(self, code: str, state: Optional[str] = None) -> Package:
        package = self.packages.get(code)
        if package is None:
            raise PackageNotFound(code)
        if state is not None and state in self.unavailable.get(code, set()):
            raise PackageNotAvailableInState(code, state)
        return package

    def list_packages(self) -> list[Package]:
        return list(self.packages.values())

    def lookup_coupon(self, code: str, package_code: str, organization: Optional[str] = None) -> CouponLookup:
        self.coupon_lookups.append((code, package_code, organization))
        for coupon in self.coupons:
            if coupon.code != code:
                continue
            if coupon.product_key not in (None, package_code):
                continue
            if coupon.organization not in (None, organization):
                continue
            return CouponLookup.found(coupon)
        return CouponLookup.not_found()

    def resolve_coupon(self, code: str, package_code: str, organization: Optional[str] = None) -> Optional[Coupon]:
        return self.lookup_coupon(code, package_code, organization).coupon
