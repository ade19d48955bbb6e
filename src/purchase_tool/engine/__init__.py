"""Engine subpackage - purchase composition and pricing."""
from .purchase import Purchase
from .models import Package, Variant, Coupon, Discount, Credit, Quote
from .errors import (
    PurchaseError,
    PackageNotFound,
    PackageNotAvailableInState,
    VariantNotFound,
    InvalidArgument,
    UnexpectedUpstreamResponse,
)

__all__ = [
    'Purchase', 'Package', 'Variant', 'Coupon', 'Discount', 'Credit', 'Quote',
    'PurchaseError', 'PackageNotFound', 'PackageNotAvailableInState',
    'VariantNotFound', 'InvalidArgument', 'UnexpectedUpstreamResponse',
]
