"""
Data models for the purchase engine.

Catalog entities (Package, Variant) and promotional entities (Coupon,
Discount, Credit) are plain dataclasses. Catalog JSON is turned into
entities through explicit ``from_dict`` constructors; fields the model
does not know about are kept in ``extra`` rather than set as attributes.
"""
from dataclasses import dataclass, field
from typing import Any, Optional


def _cents(data: dict, key: str, default: Optional[int] = None) -> int:
    """Read a non-negative integer amount in cents from a catalog record."""
    value = data.get(key, default)
    if value is None:
        raise ValueError(f"missing required field '{key}'")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer number of cents, got {value!r}")
    if value < 0:
        raise ValueError(f"'{key}' must not be negative, got {value}")
    return value


def _extra(data: dict, known: tuple) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class Variant:
    """An add-on or tier selectable within a package (e.g. ``consult.physician.45``)."""
    code: str
    name: str
    cost_in_cents: int
    default: bool = False
    default_code: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    FIELDS = ('code', 'name', 'cost_in_cents', 'default', 'default_code')

    @property
    def variant_type(self) -> str:
        """Segment of the code before the first dot."""
        return self.code.split('.', 1)[0]

    @classmethod
    def from_dict(cls, data: dict) -> 'Variant':
        """Create a Variant from a catalog record."""
        code = data.get('code')
        if not isinstance(code, str) or not code:
            raise ValueError(f"variant code must be a non-empty string, got {code!r}")
        return cls(
            code=code,
            name=str(data.get('name') or code),
            cost_in_cents=_cents(data, 'cost_in_cents', 0),
            default=bool(data.get('default', False)),
            default_code=data.get('default_code') or None,
            extra=_extra(data, cls.FIELDS),
        )

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'name': self.name,
            'cost_in_cents': self.cost_in_cents,
            'default': self.default,
            'default_code': self.default_code,
        }


@dataclass
class Package:
    """A purchasable base offering and its catalog of variants."""
    code: str
    name: str
    cost_in_cents: int
    description: str = ""
    active: bool = True
    configurable: bool = False
    variants: list[Variant] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    FIELDS = ('code', 'name', 'description', 'cost_in_cents', 'active', 'configurable', 'variants')

    @property
    def default_variants(self) -> list[Variant]:
        """Variants bundled with the package, in catalog order."""
        return [v for v in self.variants if v.default]

    @property
    def choosable_variants(self) -> list[Variant]:
        """Variants that are not part of the bundled defaults."""
        defaults = self.default_variants
        return [v for v in self.variants if v not in defaults]

    def find_variant_by_code(self, code: str) -> Optional[Variant]:
        for variant in self.variants:
            if variant.code == code:
                return variant
        return None

    @classmethod
    def from_dict(cls, data: dict) -> 'Package':
        """Create a Package from a catalog record, validating its variants."""
        if not isinstance(data, dict):
            raise ValueError(f"package record must be an object, got {type(data).__name__}")
        code = data.get('code')
        if not isinstance(code, str) or not code:
            raise ValueError(f"package code must be a non-empty string, got {code!r}")

        raw_variants = data.get('variants') or []
        if not isinstance(raw_variants, list):
            raise ValueError(f"'variants' of package {code} must be a list")
        variants = [Variant.from_dict(v) for v in raw_variants]

        seen = set()
        for variant in variants:
            if variant.code in seen:
                raise ValueError(f"duplicate variant code {variant.code} in package {code}")
            seen.add(variant.code)

        return cls(
            code=code,
            name=str(data.get('name') or code),
            description=str(data.get('description') or ""),
            cost_in_cents=_cents(data, 'cost_in_cents'),
            active=bool(data.get('active', True)),
            configurable=bool(data.get('configurable', False)),
            variants=variants,
            extra=_extra(data, cls.FIELDS),
        )


@dataclass
class Coupon:
    """A server-issued discount scoped to a package and organization."""
    code: str
    discount_in_cents: int
    product_key: Optional[str] = None
    organization: Optional[str] = None
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    FIELDS = ('code', 'discount_in_cents', 'product_key', 'organization', 'description')

    @classmethod
    def from_dict(cls, data: dict) -> 'Coupon':
        if not isinstance(data, dict):
            raise ValueError(f"coupon record must be an object, got {type(data).__name__}")
        code = data.get('code')
        if not isinstance(code, str) or not code:
            raise ValueError(f"coupon code must be a non-empty string, got {code!r}")
        return cls(
            code=code,
            discount_in_cents=_cents(data, 'discount_in_cents'),
            product_key=data.get('product_key') or None,
            organization=data.get('organization') or None,
            description=str(data.get('description') or ""),
            extra=_extra(data, cls.FIELDS),
        )


@dataclass
class Discount:
    """A locally specified flat reduction. Only exists for positive amounts."""
    discount_in_cents: int

    @classmethod
    def for_amount(cls, amount: Optional[int]) -> Optional['Discount']:
        if amount is None or amount <= 0:
            return None
        return cls(discount_in_cents=int(amount))


@dataclass
class Credit:
    """Account credit applied after coupon/discount. Zero means no credit."""
    credit_in_cents: int = 0

    @classmethod
    def for_amount(cls, amount: Optional[int]) -> 'Credit':
        return cls(credit_in_cents=int(amount or 0))


@dataclass
class TraceStep:
    """A single step in the pricing trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class QuoteLine:
    """A priced line of a quote: the package itself or one variant."""
    code: str
    name: str
    cost_in_cents: int
    kind: str  # "package" or "variant"
    default: bool = False
    default_code: Optional[str] = None


@dataclass
class Quote:
    """Snapshot of a priced purchase."""
    package_code: str
    subtotal_in_cents: int
    discounts_applied_in_cents: int
    credit_applied_in_cents: int
    total_in_cents: int
    lines: list[QuoteLine] = field(default_factory=list)
    coupon_code: Optional[str] = None
    organization: Optional[str] = None
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    @property
    def subtotal(self) -> float:
        return self.subtotal_in_cents / 100.0

    @property
    def total(self) -> float:
        return self.total_in_cents / 100.0

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the quote trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "package_code": self.package_code,
            "coupon_code": self.coupon_code,
            "organization": self.organization,
            "subtotal_in_cents": self.subtotal_in_cents,
            "discounts_applied_in_cents": self.discounts_applied_in_cents,
            "credit_applied_in_cents": self.credit_applied_in_cents,
            "total_in_cents": self.total_in_cents,
            "subtotal": self.subtotal,
            "total": self.total,
            "lines": [
                {
                    "code": line.code,
                    "name": line.name,
                    "cost_in_cents": line.cost_in_cents,
                    "kind": line.kind,
                    "default": line.default,
                    "default_code": line.default_code,
                }
                for line in self.lines
            ],
            "warnings": list(self.warnings),
            "trace": [
                {"step": t.step, "description": t.description, "value": t.value}
                for t in self.trace
            ],
        }
