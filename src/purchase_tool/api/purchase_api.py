"""
Purchase API - FastAPI router for package lookup and quoting.
"""
import json
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..engine import (
    InvalidArgument,
    PackageNotAvailableInState,
    PackageNotFound,
    Purchase,
    UnexpectedUpstreamResponse,
    VariantNotFound,
)
from ..gateway import CatalogLookup
from ..services.catalog_service import packages_frame
from .state import get_gateway

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["purchases"])


# Pydantic models for API
class QuoteRequest(BaseModel):
    """Request model for pricing a purchase."""
    package_code: str
    variants: list[str] = Field(default_factory=list)
    coupon_code: Optional[str] = None
    discount_in_cents: Optional[int] = None
    credit_in_cents: Optional[int] = Field(default=None, ge=0)
    organization: Optional[str] = None
    state: Optional[str] = None


class VariantResponse(BaseModel):
    """Response model for a catalog variant."""
    code: str
    name: str
    cost_in_cents: int
    default: bool


class PackageResponse(BaseModel):
    """Response model for a package."""
    code: str
    name: str
    description: str
    cost_in_cents: int
    active: bool
    configurable: bool
    variants: list[VariantResponse]
    default_variants: list[str]
    choosable_variants: list[str]


def _http_error(e: Exception) -> HTTPException:
    """Translate purchase errors into HTTP errors."""
    if isinstance(e, PackageNotFound):
        return HTTPException(status_code=404, detail=f"Package '{e.code}' not found")
    if isinstance(e, PackageNotAvailableInState):
        return HTTPException(
            status_code=409,
            detail=f"Package '{e.code}' is not available in {e.state}",
        )
    if isinstance(e, VariantNotFound):
        return HTTPException(status_code=422, detail=f"Variant '{e.code}' not found")
    if isinstance(e, InvalidArgument):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, UnexpectedUpstreamResponse):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# Endpoints

@router.get("/catalog")
def get_catalog(gateway: CatalogLookup = Depends(get_gateway)):
    """List packages as table records keyed by package code."""
    try:
        packages = gateway.list_packages()
    except UnexpectedUpstreamResponse as e:
        raise _http_error(e)
    df = packages_frame(packages)
    # to_json converts numpy scalars to plain JSON types
    return json.loads(df.to_json(orient="index"))


@router.get("/packages/{code}", response_model=PackageResponse)
def get_package(code: str, state: Optional[str] = None, gateway: CatalogLookup = Depends(get_gateway)):
    """Get a single package with its variants."""
    try:
        package = gateway.resolve_package(code, state=state)
    except (PackageNotFound, PackageNotAvailableInState, UnexpectedUpstreamResponse) as e:
        raise _http_error(e)
    return PackageResponse(
        code=package.code,
        name=package.name,
        description=package.description,
        cost_in_cents=package.cost_in_cents,
        active=package.active,
        configurable=package.configurable,
        variants=[VariantResponse(**v.to_dict()) for v in package.variants],
        default_variants=[v.code for v in package.default_variants],
        choosable_variants=[v.code for v in package.choosable_variants],
    )


@router.post("/quote")
def quote_purchase(req: QuoteRequest, gateway: CatalogLookup = Depends(get_gateway)):
    """Price a purchase and return the traced quote."""
    try:
        purchase = Purchase(
            req.package_code,
            variants=req.variants,
            coupon_code=req.coupon_code,
            discount_in_cents=req.discount_in_cents,
            credit_in_cents=req.credit_in_cents,
            organization=req.organization,
            available_in_state=req.state,
            gateway=gateway,
        )
    except (PackageNotFound, PackageNotAvailableInState, VariantNotFound,
            InvalidArgument, UnexpectedUpstreamResponse) as e:
        logger.info("quote_rejected", package=req.package_code, error=type(e).__name__)
        raise _http_error(e)

    quote = purchase.quote()
    if req.coupon_code and quote.coupon_code is None:
        quote.add_warning(f"Coupon '{req.coupon_code}' was not applied")
    logger.info("quote_priced", package=quote.package_code, total_in_cents=quote.total_in_cents)
    return quote.to_dict()
