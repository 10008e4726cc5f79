"""Catalog endpoints - slot grid, services and price quotes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from planner.app.api.dependencies import SessionRegistry, get_catalog, get_registry
from planner.app.catalog.service_catalog import InMemoryServiceCatalog
from planner.app.config import Settings, get_settings
from planner.app.models.catalog import OptionSelection, ServiceCatalogEntry
from planner.app.models.common import PackageType
from planner.app.models.summary import PriceBreakdown
from planner.app.pricing.calculator import breakdown

router = APIRouter(tags=["catalog"])


class SlotResponse(BaseModel):
    """One slot of the daily grid."""

    index: int
    label: str


class SlotListResponse(BaseModel):
    """Response for GET /slots."""

    slots: list[SlotResponse]


class ServiceListResponse(BaseModel):
    """Response for GET /catalog/services."""

    services: list[ServiceCatalogEntry]


class QuoteRequest(BaseModel):
    """Request body for POST /catalog/services/{service_id}/quote."""

    selections: list[OptionSelection] = Field(default_factory=list)


@router.get("/slots", response_model=SlotListResponse)
async def list_slots(
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> SlotListResponse:
    """Daily slot grid shared by every day."""
    return SlotListResponse(
        slots=[SlotResponse(index=i, label=label) for i, label in enumerate(registry.slots.labels)]
    )


@router.get("/catalog/services", response_model=ServiceListResponse)
async def list_services(
    catalog: Annotated[InMemoryServiceCatalog, Depends(get_catalog)],
    package_type: Annotated[PackageType | None, Query()] = None,
) -> ServiceListResponse:
    """Catalog entries, optionally restricted to one package tier."""
    services = catalog.all() if package_type is None else catalog.by_package_type(package_type)
    return ServiceListResponse(services=services)


@router.get("/catalog/services/{service_id}", response_model=ServiceCatalogEntry)
async def get_service(
    service_id: str,
    catalog: Annotated[InMemoryServiceCatalog, Depends(get_catalog)],
) -> ServiceCatalogEntry:
    """Single catalog entry; 404 when unknown."""
    return catalog.require(service_id)


@router.post("/catalog/services/{service_id}/quote", response_model=PriceBreakdown)
async def quote_service(
    service_id: str,
    request: QuoteRequest,
    catalog: Annotated[InMemoryServiceCatalog, Depends(get_catalog)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PriceBreakdown:
    """Line-item price of a service configuration, including tax."""
    service = catalog.require(service_id)
    return breakdown(
        service.base_price,
        request.selections,
        service.option_groups,
        tax_rate_percent=settings.tax_rate_percent,
        base_label=service.name,
    )
