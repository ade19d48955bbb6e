"""
Purchase Tool Package

Client-side purchase pricing for the Emerald catalog service.
Composes a package, its variants, and coupon/discount/credit adjustments
into a subtotal and total.
"""

__version__ = "1.0.0"
