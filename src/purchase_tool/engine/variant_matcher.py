"""
Variant Matcher - Resolves variant codes and works out which purchase
variants count as the package's bundled defaults.

Variants copied into a purchase carry no identity of their own: two
``consult.physician.45`` entries are indistinguishable. Default status is
therefore re-derived from the variant type prefix every time the list is
read, instead of being stored.
"""
from dataclasses import replace
from typing import Iterable, Union

from .errors import InvalidArgument, VariantNotFound
from .models import Package, Variant


def resolve_variants(items: Union[list, tuple], package: Package) -> list[Variant]:
    """
    Normalize a caller-supplied variant list into Variant objects.

    Variant instances pass through unchanged; strings are looked up by
    exact code on the package.

    Raises:
        InvalidArgument: items is not a list or tuple
        VariantNotFound: a code does not exist on the package
    """
    if not isinstance(items, (list, tuple)):
        raise InvalidArgument(
            f"variants must be a list of codes or Variant objects, got {type(items).__name__}"
        )

    resolved = []
    for item in items:
        if isinstance(item, Variant):
            resolved.append(item)
            continue
        variant = package.find_variant_by_code(item)
        if variant is None:
            raise VariantNotFound(item)
        resolved.append(variant)
    return resolved


def reconcile_defaults(variants: Iterable[Variant], default_variants: Iterable[Variant]) -> list[Variant]:
    """
    Return copies of ``variants`` annotated with their default status.

    For each default variant, in order, the first not-yet-matched variant
    sharing its type prefix is marked default and remembers which default
    it stands in for. Unmatched variants stay billable. Inputs are not
    modified.
    """
    annotated = [replace(v, default=False, default_code=None) for v in variants]

    for default_variant in default_variants:
        default_type = default_variant.variant_type
        for index, variant in enumerate(annotated):
            if variant.default or variant.variant_type != default_type:
                continue
            annotated[index] = replace(variant, default=True, default_code=default_variant.code)
            break

    return annotated
