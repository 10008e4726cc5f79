"""Planning session endpoints - wizard navigation, day planning and checkout."""

from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field, model_validator

from planner.app.api.dependencies import (
    SessionRegistry,
    get_controller,
    get_gateway,
    get_metrics,
    get_registry,
)
from planner.app.api.errors import SessionNotFound, error_response
from planner.app.booking.checkout import submit_itinerary
from planner.app.config import Settings, get_settings
from planner.app.db.repositories import PersistenceGateway
from planner.app.models.booking import BookingReceipt, ClientContact
from planner.app.models.catalog import OptionSelection
from planner.app.models.common import PackageType, TravelerProfile
from planner.app.models.errors import MaxDaysReached
from planner.app.models.summary import ItinerarySummary
from planner.app.scheduling.summary import ItinerarySummaryProjection
from planner.app.utils.metrics import PlannerMetrics
from planner.app.wizard.controller import WizardController, WizardResult

router = APIRouter(prefix="/itineraries", tags=["itineraries"])

Controller = Annotated[WizardController, Depends(get_controller)]


class CreateItineraryRequest(BaseModel):
    """Request body for POST /itineraries."""

    start_date: date
    days: int = Field(1, ge=1, description="Number of days to start with")
    end_date: date | None = Field(None, description="Last day (inclusive); overrides days")
    package_type: PackageType | None = None

    @model_validator(mode="after")
    def validate_date_range(self) -> "CreateItineraryRequest":
        """Ensure the range is not reversed."""
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def day_count(self) -> int:
        if self.end_date is None:
            return self.days
        return (self.end_date - self.start_date).days + 1


class ProfileRequest(BaseModel):
    """Request body for POST /itineraries/{id}/profile."""

    profile: TravelerProfile


class SelectSlotRequest(BaseModel):
    """Request body for POST /itineraries/{id}/placement/slot."""

    slot_index: int
    day_index: int | None = None


class ChooseServiceRequest(BaseModel):
    """Request body for POST /itineraries/{id}/placement/service."""

    service_id: str


class ConfirmRequest(BaseModel):
    """Request body for POST /itineraries/{id}/placement/confirm."""

    selections: list[OptionSelection] = Field(default_factory=list)


class CheckoutRequest(BaseModel):
    """Request body for POST /itineraries/{id}/checkout."""

    contact: ClientContact | None = None
    notes: str | None = Field(None, max_length=2000)


def _session_view(controller: WizardController) -> dict[str, Any]:
    engine = controller.engine
    return {
        "state": controller.state.to_dict(),
        "itinerary": jsonable_encoder(controller.itinerary),
        "day_totals": [engine.day_total(i) for i in range(len(engine.days))],
        "trip_total": engine.trip_total(),
    }


def _respond(result: WizardResult) -> dict[str, Any] | JSONResponse:
    signal = None
    if result.placement is not None and result.placement.signal is not None:
        signal = result.placement.signal.value

    if result.error is not None:
        return error_response(result.error, result.state.to_dict(), signal)

    body: dict[str, Any] = {
        "state": result.state.to_dict(),
        "payload": jsonable_encoder(result.payload),
    }
    if signal is not None:
        body["signal"] = signal
    return body


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_itinerary(
    request: CreateItineraryRequest,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, Any]:
    """Start a planning session.

    Args:
        request: Start date, day count or end date, package tier

    Returns:
        Session id plus the initial session view
    """
    if request.day_count > settings.max_days:
        raise MaxDaysReached(
            f"An itinerary can hold at most {settings.max_days} days",
            max_days=settings.max_days,
        )

    session_id, controller = registry.create(
        request.start_date, request.day_count, request.package_type
    )
    return {"session_id": session_id, **_session_view(controller)}


@router.get("/{session_id}")
async def get_itinerary(controller: Controller) -> dict[str, Any]:
    """Current wizard state, itinerary and totals."""
    return _session_view(controller)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> None:
    """Release a planning session.

    Sessions are held in memory until the client ends them, including after
    checkout.

    Raises:
        SessionNotFound: If the id is unknown
    """
    if not registry.discard(session_id):
        raise SessionNotFound(
            f"Planning session '{session_id}' does not exist", session_id=session_id
        )


# Navigation


@router.post("/{session_id}/advance", response_model=None)
async def advance(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Move one step forward."""
    return _respond(controller.advance())


@router.post("/{session_id}/back", response_model=None)
async def back(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Move one step back."""
    return _respond(controller.back())


@router.post("/{session_id}/profile", response_model=None)
async def choose_profile(
    request: ProfileRequest, controller: Controller
) -> dict[str, Any] | JSONResponse:
    """Choose the trip purpose; the payload holds the recommendations."""
    return _respond(controller.choose_profile(request.profile))


@router.get("/{session_id}/recommendations")
async def recommendations(controller: Controller) -> dict[str, Any]:
    """Recommendations fetched for the chosen profile."""
    return {
        "profile": controller.profile.value if controller.profile else None,
        "services": jsonable_encoder(controller.recommendations),
    }


@router.post("/{session_id}/summary", response_model=None)
async def go_to_summary(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Jump from day planning to the summary."""
    return _respond(controller.go_to_summary())


@router.post("/{session_id}/edit", response_model=None)
async def edit(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Return from the summary to day planning."""
    return _respond(controller.edit())


@router.get("/{session_id}/summary", response_model=ItinerarySummary)
async def summary(
    controller: Controller,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ItinerarySummary:
    """Read-only summary of the itinerary."""
    return ItinerarySummaryProjection(controller.engine.slots, settings).project(controller.engine)


# Days


@router.post("/{session_id}/days", response_model=None)
async def add_day(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Append an empty day."""
    return _respond(controller.add_day())


@router.delete("/{session_id}/days/last", response_model=None)
async def remove_last_day(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Drop the trailing day."""
    return _respond(controller.remove_last_day())


@router.post("/{session_id}/days/next", response_model=None)
async def next_day(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Plan the next day (or move to the summary from the last day)."""
    return _respond(controller.next_day())


@router.post("/{session_id}/days/previous", response_model=None)
async def previous_day(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Plan the previous day."""
    return _respond(controller.previous_day())


@router.post("/{session_id}/days/{day_index}/activate", response_model=None)
async def activate_day(day_index: int, controller: Controller) -> dict[str, Any] | JSONResponse:
    """Switch the day being planned."""
    return _respond(controller.set_active_day(day_index))


@router.get("/{session_id}/days/{day_index}/schedule", response_class=PlainTextResponse)
async def day_schedule(
    day_index: int,
    controller: Controller,
    settings: Annotated[Settings, Depends(get_settings)],
) -> str:
    """Printable schedule of one day."""
    plan = controller.engine.day(day_index)
    return ItinerarySummaryProjection(controller.engine.slots, settings).format_day_schedule(plan)


@router.delete("/{session_id}/days/{day_index}/services/{service_id}", response_model=None)
async def remove_service(
    day_index: int, service_id: str, controller: Controller
) -> dict[str, Any] | JSONResponse:
    """Remove a service from a day; removing an absent service is a no-op."""
    return _respond(controller.remove_service(service_id, day_index))


# Placement


@router.post("/{session_id}/placement/slot", response_model=None)
async def select_slot(
    request: SelectSlotRequest, controller: Controller
) -> dict[str, Any] | JSONResponse:
    """Pick the starting slot of a new placement."""
    return _respond(controller.select_slot(request.slot_index, request.day_index))


@router.post("/{session_id}/placement/service", response_model=None)
async def choose_service(
    request: ChooseServiceRequest, controller: Controller
) -> dict[str, Any] | JSONResponse:
    """Pick the service to place."""
    return _respond(controller.choose_service(request.service_id))


@router.post("/{session_id}/placement/confirm", response_model=None)
async def confirm(
    request: ConfirmRequest, controller: Controller
) -> dict[str, Any] | JSONResponse:
    """Configure, price and place the chosen service."""
    return _respond(controller.confirm(request.selections))


@router.post("/{session_id}/placement/cancel", response_model=None)
async def cancel_placement(controller: Controller) -> dict[str, Any] | JSONResponse:
    """Abandon the placement in progress."""
    return _respond(controller.cancel_placement())


# Checkout


@router.post(
    "/{session_id}/checkout",
    response_model=BookingReceipt,
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    request: CheckoutRequest,
    controller: Controller,
    gateway: Annotated[PersistenceGateway, Depends(get_gateway)],
    metrics: Annotated[PlannerMetrics, Depends(get_metrics)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> BookingReceipt:
    """Hand the finished itinerary to the booking gateway.

    Only allowed from the summary step; gateway failures surface as 503.
    """
    return submit_itinerary(
        controller,
        gateway,
        request.contact,
        request.notes,
        settings=settings,
        metrics=metrics,
    )
