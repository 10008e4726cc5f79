"""Integration tests for the planning session API."""

import inspect
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from planner.app.api.dependencies import SessionRegistry, get_gateway, get_registry
from planner.app.api.routes.itineraries import checkout
from planner.app.catalog.seed import default_catalog
from planner.app.config import Settings
from planner.app.db.inmemory import InMemoryPersistenceGateway
from planner.app.main import app
from planner.app.utils.metrics import NullPlannerMetrics


@pytest.fixture
def registry() -> SessionRegistry:
    """Fresh session registry per test."""
    return SessionRegistry(default_catalog(), Settings(), NullPlannerMetrics())


@pytest.fixture
def gateway() -> InMemoryPersistenceGateway:
    """In-memory booking store."""
    return InMemoryPersistenceGateway()


@pytest.fixture
def client(registry: SessionRegistry, gateway: InMemoryPersistenceGateway) -> Iterator[TestClient]:
    """Test client wired to the per-test registry and gateway."""
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_session(client: TestClient, **body: object) -> str:
    payload = {"start_date": "2025-06-10", **body}
    response = client.post("/itineraries", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["session_id"]


def plan_private_chef(client: TestClient, session_id: str) -> dict:
    """Walk to day planning and place a private chef dinner for six at 11:00 AM."""
    base = f"/itineraries/{session_id}"
    assert client.post(f"{base}/advance").status_code == 200
    assert client.post(f"{base}/profile", json={"profile": "couple"}).status_code == 200
    assert client.post(f"{base}/advance").status_code == 200
    assert client.post(f"{base}/placement/slot", json={"slot_index": 2}).status_code == 200
    assert (
        client.post(f"{base}/placement/service", json={"service_id": "private-chef"}).status_code
        == 200
    )
    response = client.post(
        f"{base}/placement/confirm",
        json={
            "selections": [
                {"group_id": "mealType", "value": "dinner"},
                {"group_id": "guestCount", "quantity": 6},
            ]
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestCreateItinerary:
    """Test POST /itineraries."""

    def test_create_with_days(self, client: TestClient) -> None:
        """Test a session starts on the welcome step with empty days."""
        response = client.post("/itineraries", json={"start_date": "2025-06-10", "days": 3})

        assert response.status_code == 201
        data = response.json()
        assert data["state"]["step"] == 1
        assert data["state"]["step_name"] == "WELCOME"
        assert [d["date"] for d in data["itinerary"]["days"]] == [
            "2025-06-10",
            "2025-06-11",
            "2025-06-12",
        ]
        assert data["trip_total"] == 0.0

    def test_create_with_end_date(self, client: TestClient) -> None:
        """Test a date range creates one day per date."""
        response = client.post(
            "/itineraries",
            json={"start_date": "2025-06-10", "end_date": "2025-06-11", "package_type": "premium"},
        )

        data = response.json()
        assert data["state"]["day_count"] == 2
        assert data["itinerary"]["package_type"] == "premium"

    def test_create_reversed_range(self, client: TestClient) -> None:
        """Test reversed ranges fail request validation."""
        response = client.post(
            "/itineraries", json={"start_date": "2025-06-10", "end_date": "2025-06-01"}
        )

        assert response.status_code == 422

    def test_create_too_many_days(self, client: TestClient) -> None:
        """Test the configured day limit applies on creation."""
        response = client.post("/itineraries", json={"start_date": "2025-06-10", "days": 30})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "MAX_DAYS_REACHED"

    def test_unknown_session(self, client: TestClient) -> None:
        """Test unknown session ids are 404."""
        response = client.get("/itineraries/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"


class TestPlanningFlow:
    """Test the wizard end to end over HTTP."""

    def test_place_review_and_checkout(
        self, client: TestClient, gateway: InMemoryPersistenceGateway
    ) -> None:
        """Test placing a service, reviewing the summary and checking out."""
        session_id = create_session(client)
        base = f"/itineraries/{session_id}"

        confirmed = plan_private_chef(client, session_id)
        assert confirmed["payload"]["price"] == 300.0
        assert confirmed["payload"]["configuration_label"] == "Meal: Dinner, Guests: 6"
        assert confirmed["state"]["placement"]["state"] == "idle"

        summary = client.get(f"{base}/summary").json()
        assert summary["total_services"] == 1
        assert summary["trip_total"] == 300.0
        assert summary["tax"] == 15.0
        assert summary["total_with_tax"] == 315.0
        assert summary["days"][0]["items"][0]["start_label"] == "11:00 AM"
        assert summary["days"][0]["items"][0]["end_label"] == "2:00 PM"

        assert client.post(f"{base}/summary").json()["state"]["step_name"] == "SUMMARY"

        response = client.post(
            f"{base}/checkout",
            json={"contact": {"name": "Ana Diaz", "email": "ana@example.com"}},
        )

        assert response.status_code == 201, response.text
        receipt = response.json()
        assert receipt["status"] == "pending"
        stored = gateway.get_booking(receipt["booking_id"])
        assert stored is not None
        assert stored.total_with_tax == 315.0

    def test_recommendations(self, client: TestClient) -> None:
        """Test recommendations are fetched for the chosen profile."""
        session_id = create_session(client)
        base = f"/itineraries/{session_id}"
        client.post(f"{base}/advance")

        chosen = client.post(f"{base}/profile", json={"profile": "family"}).json()
        listed = client.get(f"{base}/recommendations").json()

        ids = [s["id"] for s in chosen["payload"]]
        assert ids[0] == "catamaran-trips"
        assert [s["id"] for s in listed["services"]] == ids
        assert listed["profile"] == "family"

    def test_conflicting_slot_returns_409_with_state(self, client: TestClient) -> None:
        """Test a rejected slot pick reports the error and the unchanged state."""
        session_id = create_session(client)
        plan_private_chef(client, session_id)

        response = client.post(
            f"/itineraries/{session_id}/placement/slot", json={"slot_index": 3}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"]["code"] == "SLOT_CONFLICT"
        assert body["state"]["step"] == 4
        assert body["state"]["placement"]["state"] == "idle"

    def test_slot_out_of_range_is_422(self, client: TestClient) -> None:
        """Test picking a slot outside the grid."""
        session_id = create_session(client)
        base = f"/itineraries/{session_id}"
        client.post(f"{base}/advance")
        client.post(f"{base}/profile", json={"profile": "relax"})
        client.post(f"{base}/advance")

        response = client.post(f"{base}/placement/slot", json={"slot_index": 9})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "SLOT_OUT_OF_RANGE"

    def test_invalid_transition_is_409(self, client: TestClient) -> None:
        """Test illegal wizard moves are rejected with the current state."""
        session_id = create_session(client)

        response = client.post(f"/itineraries/{session_id}/back")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATE_TRANSITION"
        assert response.json()["state"]["step"] == 1

    def test_checkout_before_summary(self, client: TestClient) -> None:
        """Test checkout is refused before the summary step."""
        session_id = create_session(client)

        response = client.post(f"/itineraries/{session_id}/checkout", json={})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATE_TRANSITION"

    def test_rejected_confirm_keeps_options_open(self, client: TestClient) -> None:
        """Test a failed confirm tells the client the options form stays open."""
        session_id = create_session(client)
        base = f"/itineraries/{session_id}"
        client.post(f"{base}/advance")
        client.post(f"{base}/profile", json={"profile": "couple"})
        client.post(f"{base}/advance")
        client.post(f"{base}/placement/slot", json={"slot_index": 8})
        client.post(f"{base}/placement/service", json={"service_id": "private-chef"})

        response = client.post(f"{base}/placement/confirm", json={"selections": []})

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "SLOT_OUT_OF_RANGE"
        assert body["signal"] == "options_open"
        assert body["state"]["placement"]["state"] == "service_chosen"


class TestEndSession:
    """Test DELETE /itineraries/{session_id}."""

    def test_end_session_releases_it(self, client: TestClient, registry: SessionRegistry) -> None:
        """Test an ended session is dropped from the registry."""
        kept = create_session(client)
        ended = create_session(client)
        assert len(registry) == 2

        response = client.delete(f"/itineraries/{ended}")

        assert response.status_code == 204
        assert len(registry) == 1
        assert client.get(f"/itineraries/{ended}").status_code == 404
        assert client.get(f"/itineraries/{kept}").status_code == 200

    def test_end_session_after_checkout(
        self, client: TestClient, registry: SessionRegistry, gateway: InMemoryPersistenceGateway
    ) -> None:
        """Test ending a session keeps the stored booking."""
        session_id = create_session(client)
        base = f"/itineraries/{session_id}"
        plan_private_chef(client, session_id)
        client.post(f"{base}/summary")
        booking_id = client.post(f"{base}/checkout", json={}).json()["booking_id"]

        assert client.delete(base).status_code == 204

        assert len(registry) == 0
        assert gateway.get_booking(booking_id) is not None

    def test_end_unknown_session(self, client: TestClient) -> None:
        """Test ending an unknown or already ended session is 404."""
        session_id = create_session(client)
        client.delete(f"/itineraries/{session_id}")

        response = client.delete(f"/itineraries/{session_id}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"


class TestDays:
    """Test day management endpoints."""

    def test_remove_only_day(self, client: TestClient) -> None:
        """Test the single remaining day is protected."""
        session_id = create_session(client)
        plan_private_chef(client, session_id)

        response = client.delete(f"/itineraries/{session_id}/days/last")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CANNOT_REMOVE_ONLY_DAY"

    def test_add_activate_and_remove_service(self, client: TestClient) -> None:
        """Test day switching and service removal."""
        session_id = create_session(client)
        base = f"/itineraries/{session_id}"
        plan_private_chef(client, session_id)

        added = client.post(f"{base}/days").json()
        assert added["state"]["day_count"] == 2

        activated = client.post(f"{base}/days/1/activate").json()
        assert activated["state"]["active_day_index"] == 1

        removed = client.delete(f"{base}/days/0/services/private-chef").json()
        assert removed["payload"] == 1
        assert client.get(base).json()["trip_total"] == 0.0

    def test_next_day_on_last_day_moves_to_summary(self, client: TestClient) -> None:
        """Test next day from the last day opens the summary."""
        session_id = create_session(client)
        plan_private_chef(client, session_id)

        response = client.post(f"/itineraries/{session_id}/days/next")

        assert response.json()["state"]["step_name"] == "SUMMARY"

    def test_day_schedule(self, client: TestClient) -> None:
        """Test the printable schedule of a day."""
        session_id = create_session(client)
        plan_private_chef(client, session_id)

        response = client.get(f"/itineraries/{session_id}/days/0/schedule")

        assert response.status_code == 200
        assert response.text == "11:00 AM - 2:00 PM: Private Chef"

    def test_unknown_day_schedule(self, client: TestClient) -> None:
        """Test schedules of missing days are 404."""
        session_id = create_session(client)

        response = client.get(f"/itineraries/{session_id}/days/7/schedule")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DAY_NOT_FOUND"


class TestCatalogRoutes:
    """Test catalog endpoints."""

    def test_slots(self, client: TestClient) -> None:
        """Test the slot grid listing."""
        slots = client.get("/slots").json()["slots"]

        assert len(slots) == 9
        assert slots[0] == {"index": 0, "label": "9:00 AM"}
        assert slots[-1] == {"index": 8, "label": "5:00 PM"}

    def test_services_by_package_type(self, client: TestClient) -> None:
        """Test tier filtering of the service listing."""
        services = client.get("/catalog/services", params={"package_type": "premium"}).json()[
            "services"
        ]

        assert services
        assert all("premium" in s["package_types"] for s in services)

    def test_unknown_service(self, client: TestClient) -> None:
        """Test unknown services are 404."""
        response = client.get("/catalog/services/space-flight")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SERVICE_NOT_FOUND"

    def test_quote(self, client: TestClient) -> None:
        """Test a priced breakdown for a configuration."""
        response = client.post(
            "/catalog/services/golf-cart-rentals/quote",
            json={
                "selections": [
                    {"group_id": "insurance", "value": "full"},
                    {"group_id": "cartType", "value": "luxury"},
                ]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["subtotal"] == 100.0
        assert data["tax"] == 5.0
        assert data["total"] == 105.0
        assert [line["kind"] for line in data["details"]] == ["base", "addon", "addon"]

    def test_quote_invalid_selection(self, client: TestClient) -> None:
        """Test unpriceable selections are 422."""
        response = client.post(
            "/catalog/services/golf-cart-rentals/quote",
            json={"selections": [{"group_id": "cartType", "value": "hovercraft"}]},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_PRICE_INPUT"


def test_checkout_runs_in_threadpool() -> None:
    """Test checkout is a plain def route run in the threadpool."""
    assert not inspect.iscoroutinefunction(checkout)
