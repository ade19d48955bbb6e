"""
Errors raised while building and pricing a purchase.
"""
from typing import Optional


class PurchaseError(Exception):
    """Base class for purchase construction failures."""


class PackageNotFound(PurchaseError):
    """The catalog has no package with this code."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code


class PackageNotAvailableInState(PurchaseError):
    """The package exists but is not sold in the requested state."""

    def __init__(self, code: str, state: Optional[str]):
        super().__init__(f"{code} is not available in {state}")
        self.code = code
        self.state = state


class VariantNotFound(PurchaseError):
    """A variant code does not resolve against the package's variants."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code


class InvalidArgument(PurchaseError, TypeError):
    """A value of the wrong shape was supplied (e.g. a string instead of a variant list)."""


class UnexpectedUpstreamResponse(PurchaseError):
    """The catalog answered with something that is neither success nor a known error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
