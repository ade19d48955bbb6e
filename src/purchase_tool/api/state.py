"""
Shared API state - the catalog gateway used by request handlers.

Handlers receive the gateway through the ``get_gateway`` dependency so
tests can swap in a FakeCatalogGateway via ``app.dependency_overrides``.
"""
from typing import Optional

from fastapi import HTTPException

from ..config.settings import get_settings
from ..gateway import CatalogGateway, CatalogLookup

_gateway: Optional[CatalogLookup] = None


def get_gateway() -> CatalogLookup:
    """Get the process-wide catalog gateway, building it on first use."""
    global _gateway
    if _gateway is None:
        try:
            _gateway = CatalogGateway(get_settings())
        except ValueError as e:
            raise HTTPException(status_code=503, detail=str(e))
    return _gateway


def close_gateway():
    global _gateway
    if isinstance(_gateway, CatalogGateway):
        _gateway.close()
    _gateway = None
