"""
Catalog Gateway - looks up packages and coupons on the Emerald catalog API.

Endpoints (relative to ``Settings.catalog_url``):
- GET /packages/show/{code}?state=...
- GET /coupons/show/{code}?product_key=...&organization=...
- GET /packages/index

Package lookups raise on failure. Coupon lookups never raise; they report
found / not found / error through CouponLookup.
"""
import time
from typing import Optional
from urllib.parse import quote

import httpx
import structlog

from ..config.settings import Settings, get_settings
from ..engine.errors import PackageNotAvailableInState, PackageNotFound, UnexpectedUpstreamResponse
from ..engine.models import Coupon, Package
from .base import CouponLookup

logger = structlog.get_logger(__name__)

ERROR_NOT_FOUND = "package_not_found"
ERROR_NOT_AVAILABLE_IN_STATE = "package_not_available_in_state"

_clock = time.monotonic


def build_client(settings: Settings) -> httpx.Client:
    """Create an ``httpx.Client`` with the configured base URL and timeouts."""
    return httpx.Client(
        base_url=settings.catalog_url.rstrip('/'),
        timeout=httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout),
        headers={"Accept": "application/json"},
    )


def _error_code(response: httpx.Response) -> Optional[str]:
    """Pull the structured error code out of an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    code = body.get('error_code') or body.get('error')
    return str(code) if code else None


class CatalogGateway:
    """
    Synchronous client for the catalog API.

    A pre-built ``httpx.Client`` may be passed in (tests use one backed by
    ``httpx.MockTransport``); otherwise one is built from settings.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or get_settings()
        if client is None:
            if not self.settings.catalog_url:
                raise ValueError(
                    "catalog_url is not configured. Set PURCHASE_TOOL_CATALOG_URL."
                )
            client = build_client(self.settings)
        self.client = client

    def close(self):
        self.client.close()

    def __enter__(self) -> 'CatalogGateway':
        return self

    def __exit__(self, *exc):
        self.close()

    def _get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        """
        GET with an overall deadline of ``request_timeout`` seconds.

        httpx timeouts bound each connect/read phase separately, so a server
        trickling its body could outlast them. The body is read chunk by
        chunk and abandoned with ``httpx.ReadTimeout`` once the deadline passes.
        """
        params = {k: v for k, v in (params or {}).items() if v is not None}
        deadline = _clock() + self.settings.request_timeout
        with self.client.stream("GET", path, params=params) as response:
            body = []
            for chunk in response.iter_bytes():
                if _clock() > deadline:
                    raise httpx.ReadTimeout(
                        f"response not received within {self.settings.request_timeout}s",
                        request=response.request,
                    )
                body.append(chunk)
        # The body is already decoded, so the encoding headers no longer apply
        headers = [
            (name, value) for name, value in response.headers.multi_items()
            if name.lower() not in ("content-encoding", "content-length")
        ]
        return httpx.Response(
            response.status_code,
            headers=headers,
            content=b"".join(body),
            request=response.request,
        )

    # ------------------------------------------------------------------
    # Packages
    # ------------------------------------------------------------------

    def resolve_package(self, code: str, state: Optional[str] = None) -> Package:
        """
        Look up a package by code.

        Raises:
            PackageNotFound: the catalog has no such package
            PackageNotAvailableInState: the package is not sold in ``state``
            UnexpectedUpstreamResponse: any other failure, including transport errors
        """
        if state is None and self.settings.require_state:
            logger.warning("package_lookup_without_state", package=code)

        try:
            response = self._get(f"/packages/show/{quote(code, safe='')}", {"state": state})
        except httpx.HTTPError as e:
            logger.error("package_lookup_failed", package=code, error=str(e))
            raise UnexpectedUpstreamResponse(f"Package lookup for {code} failed: {e}") from e

        if response.is_success:
            try:
                package = Package.from_dict(response.json())
            except ValueError as e:
                raise UnexpectedUpstreamResponse(
                    f"Malformed package body for {code}: {e}", response.status_code
                ) from e
            logger.debug("package_resolved", package=package.code, variants=len(package.variants))
            return package

        error_code = _error_code(response)
        if error_code == ERROR_NOT_AVAILABLE_IN_STATE:
            raise PackageNotAvailableInState(code, state)
        if error_code == ERROR_NOT_FOUND or response.status_code == 404:
            raise PackageNotFound(code)

        logger.error("package_lookup_unexpected", package=code, status=response.status_code)
        raise UnexpectedUpstreamResponse(
            f"Unexpected response {response.status_code} for package {code}", response.status_code
        )

    def list_packages(self) -> list[Package]:
        """List all packages in the catalog."""
        try:
            response = self._get("/packages/index")
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise UnexpectedUpstreamResponse(f"Package listing failed: {e}") from e
        except ValueError as e:
            raise UnexpectedUpstreamResponse(f"Package listing returned invalid JSON: {e}") from e

        if not isinstance(body, list):
            raise UnexpectedUpstreamResponse("Package listing must be a JSON array")
        try:
            return [Package.from_dict(item) for item in body]
        except ValueError as e:
            raise UnexpectedUpstreamResponse(f"Malformed package in listing: {e}") from e

    # ------------------------------------------------------------------
    # Coupons
    # ------------------------------------------------------------------

    def lookup_coupon(self, code: str, package_code: str, organization: Optional[str] = None) -> CouponLookup:
        """Look up a coupon scoped to a package and organization. Never raises."""
        params = {"product_key": package_code, "organization": organization}
        try:
            response = self._get(f"/coupons/show/{quote(code, safe='')}", params)
        except httpx.HTTPError as e:
            return CouponLookup.failed(f"{type(e).__name__}: {e}")

        if response.status_code == 404:
            return CouponLookup.not_found()
        if not response.is_success:
            return CouponLookup.failed(f"HTTP {response.status_code}")
        if not response.content.strip():
            return CouponLookup.not_found()

        try:
            body = response.json()
        except ValueError:
            return CouponLookup.failed("invalid JSON body")
        if not body:
            return CouponLookup.not_found()
        try:
            return CouponLookup.found(Coupon.from_dict(body))
        except ValueError as e:
            return CouponLookup.failed(str(e))

    def resolve_coupon(self, code: str, package_code: str, organization: Optional[str] = None) -> Optional[Coupon]:
        """Coupon for this code, or None when it is missing or the lookup failed."""
        return self.lookup_coupon(code, package_code, organization).coupon
