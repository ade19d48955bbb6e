"""
Purchase - binds a package, its selected variants and the promotional
slots (coupon, discount, credit), and prices them.

Pricing:
1. Subtotal = package cost + all selected variants - bundled default variants
2. Coupon, or failing that the discount, is subtracted (clamped to the subtotal)
3. Credit is subtracted from what remains (clamped again)

Subtotal and total are derived on every read. Adjustments are stored as
given; clamping only happens when the total is computed.
"""
from typing import Optional, Union

import structlog

from .errors import VariantNotFound
from .models import Coupon, Credit, Discount, Package, Quote, QuoteLine, Variant
from .variant_matcher import reconcile_defaults, resolve_variants
from ..config.settings import get_settings
from ..gateway.base import FOUND, LOOKUP_ERROR, CatalogLookup

logger = structlog.get_logger(__name__)


class Purchase:
    """
    A priced purchase of one package during a checkout attempt.

    ``package`` may be a Package or a package code; a code is resolved
    through ``gateway``. The package's default variants are always added
    to the caller's variant list.
    """

    def __init__(
        self,
        package: Union[Package, str],
        variants: Optional[list] = None,
        coupon_code: Optional[str] = None,
        coupon: Optional[Coupon] = None,
        discount_in_cents: Optional[int] = None,
        credit_in_cents: Optional[int] = None,
        organization: Optional[str] = None,
        available_in_state: Optional[str] = None,
        gateway: Optional[CatalogLookup] = None,
        baseline_variants: Optional[list] = None,
    ):
        self.gateway = gateway
        self.organization = organization
        self.available_in_state = available_in_state

        if isinstance(package, Package):
            self.package = package
        else:
            self.package = self._require_gateway().resolve_package(package, state=available_in_state)

        if baseline_variants is None:
            self._baseline = list(self.package.default_variants)
        else:
            self._baseline = resolve_variants(baseline_variants, self.package)

        chosen = resolve_variants(variants if variants is not None else [], self.package)
        self._variants: list[Variant] = chosen + list(self._baseline)

        self._coupon: Optional[Coupon] = None
        self.coupon = coupon if coupon is not None else coupon_code
        self.discount = discount_in_cents
        self.credit = credit_in_cents

        logger.debug(
            "purchase_created",
            package=self.package.code,
            variants=[v.code for v in self._variants],
            organization=organization,
        )

    @classmethod
    def upgrade_for(
        cls,
        variant_code: str,
        gateway: CatalogLookup,
        package_code: Optional[str] = None,
        **kwargs,
    ) -> 'Purchase':
        """
        Build a purchase upgrading from a variant the customer already owns.

        The purchase is made against the upgrade package (``base_package``
        unless configured otherwise) and holds only the owned variant, which
        counts as the bundled default. Swapping it for a higher tier of the
        same type then prices just the difference.
        """
        for key in ("variants", "baseline_variants"):
            if key in kwargs:
                raise TypeError(f"upgrade_for() does not accept '{key}'")
        package_code = package_code or get_settings().upgrade_package_code
        package = gateway.resolve_package(package_code, state=kwargs.get('available_in_state'))
        owned = package.find_variant_by_code(variant_code)
        if owned is None:
            raise VariantNotFound(variant_code)
        return cls(package, variants=[], baseline_variants=[owned], gateway=gateway, **kwargs)

    def _require_gateway(self) -> CatalogLookup:
        if self.gateway is None:
            raise ValueError("A catalog gateway is required to look up codes")
        return self.gateway

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    @property
    def variants(self) -> list[Variant]:
        """Selected variants, annotated with which ones stand in for package defaults."""
        return reconcile_defaults(self._variants, self._baseline)

    @variants.setter
    def variants(self, value):
        """Replace the selection. Defaults already covered by a selected variant are not added again."""
        chosen = resolve_variants(value, self.package)
        covered = {v.default_code for v in reconcile_defaults(chosen, self._baseline) if v.default}
        self._variants = chosen + [v for v in self._baseline if v.code not in covered]

    @property
    def default_variants(self) -> list[Variant]:
        """The defaults this purchase is priced against."""
        return list(self._baseline)

    def add_variant(self, variant: Union[Variant, str]):
        self._variants.extend(resolve_variants([variant], self.package))

    def remove_variant(self, code: str):
        """Remove the first selected variant with this code."""
        for index, variant in enumerate(self._variants):
            if variant.code == code:
                del self._variants[index]
                return
        raise VariantNotFound(code)

    # ------------------------------------------------------------------
    # Promotional slots
    # ------------------------------------------------------------------

    @property
    def coupon(self) -> Optional[Coupon]:
        return self._coupon

    @coupon.setter
    def coupon(self, value: Union[Coupon, str, None]):
        if value is None or isinstance(value, Coupon):
            self._coupon = value
            return

        lookup = self._require_gateway().lookup_coupon(
            value, package_code=self.package.code, organization=self.organization
        )
        if lookup.status == LOOKUP_ERROR:
            logger.warning(
                "coupon_lookup_failed",
                coupon_code=value,
                package=self.package.code,
                error=lookup.error,
            )
        self._coupon = lookup.coupon if lookup.status == FOUND else None

    @property
    def discount(self) -> Optional[Discount]:
        return self._discount

    @discount.setter
    def discount(self, value: Union[Discount, int, None]):
        if isinstance(value, Discount):
            self._discount = value if value.discount_in_cents > 0 else None
        else:
            self._discount = Discount.for_amount(value)

    @property
    def credit(self) -> Credit:
        return self._credit

    @credit.setter
    def credit(self, value: Union[Credit, int, None]):
        if isinstance(value, Credit):
            self._credit = value if value.credit_in_cents >= 0 else Credit(0)
        else:
            self._credit = Credit.for_amount(value)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    @property
    def subtotal_in_cents(self) -> int:
        variants_cost = sum(v.cost_in_cents for v in self._variants)
        defaults_cost = sum(v.cost_in_cents for v in self._baseline)
        return self.package.cost_in_cents + variants_cost - defaults_cost

    @property
    def discounts_applied_in_cents(self) -> int:
        """Amount taken off by the coupon, or by the discount when no coupon is set."""
        subtotal = max(self.subtotal_in_cents, 0)
        if self._coupon is not None:
            return max(min(self._coupon.discount_in_cents, subtotal), 0)
        if self._discount is not None:
            return max(min(self._discount.discount_in_cents, subtotal), 0)
        return 0

    @property
    def credit_applied_in_cents(self) -> int:
        remaining = max(self.subtotal_in_cents, 0) - self.discounts_applied_in_cents
        return max(min(self._credit.credit_in_cents, remaining), 0)

    @property
    def total_in_cents(self) -> int:
        return max(self.subtotal_in_cents, 0) - self.discounts_applied_in_cents - self.credit_applied_in_cents

    @property
    def subtotal(self) -> float:
        return self.subtotal_in_cents / 100.0

    @property
    def total(self) -> float:
        return self.total_in_cents / 100.0

    def quote(self) -> Quote:
        """Price the purchase and record each step of the calculation."""
        variants = self.variants
        quote = Quote(
            package_code=self.package.code,
            subtotal_in_cents=self.subtotal_in_cents,
            discounts_applied_in_cents=self.discounts_applied_in_cents,
            credit_applied_in_cents=self.credit_applied_in_cents,
            total_in_cents=self.total_in_cents,
            coupon_code=self._coupon.code if self._coupon else None,
            organization=self.organization,
        )

        quote.lines.append(QuoteLine(
            code=self.package.code,
            name=self.package.name,
            cost_in_cents=self.package.cost_in_cents,
            kind="package",
        ))
        quote.add_trace("Package", self.package.name, f"{self.package.cost_in_cents}¢")
        if not self.package.active:
            quote.add_warning(f"Package {self.package.code} is not active")

        for variant in variants:
            quote.lines.append(QuoteLine(
                code=variant.code,
                name=variant.name,
                cost_in_cents=variant.cost_in_cents,
                kind="variant",
                default=variant.default,
                default_code=variant.default_code,
            ))
            if variant.default:
                quote.add_trace("Default Variant", f"{variant.code} covers {variant.default_code}", f"{variant.cost_in_cents}¢")
            else:
                quote.add_trace("Add-on", variant.code, f"{variant.cost_in_cents}¢")

        matched = {v.default_code for v in variants if v.default}
        for default_variant in self._baseline:
            if default_variant.code not in matched:
                quote.add_warning(f"Default variant {default_variant.code} has no matching selection")

        defaults_cost = sum(v.cost_in_cents for v in self._baseline)
        if defaults_cost:
            quote.add_trace("Bundled Defaults", "Package defaults are included", f"-{defaults_cost}¢")
        quote.add_trace("Subtotal", "Package plus variants", f"{quote.subtotal_in_cents}¢")

        if self._coupon is not None:
            quote.add_trace("Coupon", self._coupon.code, f"-{quote.discounts_applied_in_cents}¢")
            if self._discount is not None:
                quote.add_warning("Discount ignored because a coupon is applied")
        elif self._discount is not None:
            quote.add_trace("Discount", "Flat discount", f"-{quote.discounts_applied_in_cents}¢")

        if quote.credit_applied_in_cents:
            quote.add_trace("Credit", "Account credit", f"-{quote.credit_applied_in_cents}¢")
        quote.add_trace("Total", "Amount due", f"{quote.total_in_cents}¢")

        return quote

    def __repr__(self) -> str:
        return (
            f"Purchase(package={self.package.code!r}, "
            f"variants={[v.code for v in self._variants]!r}, "
            f"total_in_cents={self.total_in_cents})"
        )
