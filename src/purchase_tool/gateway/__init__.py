"""Gateway subpackage - access to the remote catalog service."""
from .base import CouponLookup, CatalogLookup
from .catalog_gateway import CatalogGateway
from .fake import FakeCatalogGateway

__all__ = ['CouponLookup', 'CatalogLookup', 'CatalogGateway', 'FakeCatalogGateway']
