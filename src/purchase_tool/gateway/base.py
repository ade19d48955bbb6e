"""
Catalog gateway contract shared by the HTTP gateway and the in-memory fake.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..engine.models import Coupon, Package

FOUND = "found"
NOT_FOUND = "not_found"
LOOKUP_ERROR = "error"


@dataclass
class CouponLookup:
    """Outcome of a coupon lookup: found, not found, or failed."""
    status: str
    coupon: Optional['Coupon'] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, coupon: 'Coupon') -> 'CouponLookup':
        return cls(status=FOUND, coupon=coupon)

    @classmethod
    def not_found(cls) -> 'CouponLookup':
        return cls(status=NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> 'CouponLookup':
        return cls(status=LOOKUP_ERROR, error=error)


@runtime_checkable
class CatalogLookup(Protocol):
    """What a Purchase needs from the catalog service."""

    def resolve_package(self, code: str, state: Optional[str] = None) -> 'Package':
        ...

    def lookup_coupon(self, code: str, package_code: str, organization: Optional[str] = None) -> CouponLookup:
        ...

    def resolve_coupon(self, code: str, package_code: str, organization: Optional[str] = None) -> Optional['Coupon']:
        ...

    def list_packages(self) -> list['Package']:
        ...
