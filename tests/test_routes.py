"""Tests for the HTTP API."""
import httpx
import pytest
from fastapi.testclient import TestClient

from finpin.api.routes import get_ai_service, get_trip_store
from finpin.config import Settings
from finpin.main import app
from finpin.models.store import TripStore
from finpin.models.suggestions import BudgetAdvice, ExpenseSuggestion, LocationDetails, TripInsights
from finpin.services.ai_service import AIService
from finpin.services.errors import NetworkError
from finpin.services.gemini_client import GeminiClient
from finpin.services.geocoding import GeocodingClient


class FakeAIService:
    """Stands in for AIService and records its calls."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def _answer(self, name, result, *args):
        self.calls.append((name, args))
        if self.fail:
            raise NetworkError("network down")
        return result

    async def get_location_details(self, coordinate):
        details = LocationDetails(
            name="Louvre", estimated_cost=22, duration="3 hours",
            best_time="Morning", fun_tip="Skip the line", city="Paris", country="France"
        )
        return await self._answer("location", details, coordinate)

    async def get_budget_advice(self, spent, total, remaining, recent_expenses):
        advice = BudgetAdvice(message="Fine!", suggestions=[], watch_categories=["Food"])
        return await self._answer("budget", advice, spent, total, remaining, recent_expenses)

    async def suggest_expense_details(self, title, location=None):
        suggestion = ExpenseSuggestion(category="Food", min_price=2, max_price=5)
        return await self._answer("expense", suggestion, title, location)

    async def get_trip_insights(self, trip):
        insights = TripInsights(pattern="p", saving_tip="s", challenge="c")
        return await self._answer("insights", insights, trip)


@pytest.fixture
def store():
    return TripStore()


@pytest.fixture
def ai():
    return FakeAIService()


@pytest.fixture
def client(store, ai):
    app.dependency_overrides[get_trip_store] = lambda: store
    app.dependency_overrides[get_ai_service] = lambda: ai
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_trip(client, name="Paris", budget=1000) -> dict:
    response = client.post("/api/trips", json={
        "name": name,
        "start_date": "2026-06-01",
        "end_date": "2026-06-05",
        "total_budget": budget
    })
    assert response.status_code == 200
    return response.json()


class TestTripEndpoints:
    """Test trip, expense and pin endpoints."""

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_create_and_get(self, client):
        trip = create_trip(client)

        assert trip["duration"] == 5
        assert trip["spent"] == 0
        assert trip["remaining"] == 1000

        fetched = client.get(f"/api/trips/{trip['id']}").json()
        assert fetched["name"] == "Paris"
        assert client.get("/api/trips/current").json()["id"] == trip["id"]

    def test_create_rejects_invalid(self, client):
        bad_budget = {"name": "X", "start_date": "2026-06-01", "end_date": "2026-06-02", "total_budget": 0}
        backwards = {"name": "X", "start_date": "2026-06-02", "end_date": "2026-06-01", "total_budget": 10}

        assert client.post("/api/trips", json=bad_budget).status_code == 422
        assert client.post("/api/trips", json=backwards).status_code == 422

    def test_unknown_trip_is_404(self, client):
        assert client.get("/api/trips/nope").status_code == 404
        assert client.get("/api/trips/current").status_code == 404
        assert client.post("/api/trips/nope/budget-advice").status_code == 404

    def test_list_select_delete(self, client):
        first = create_trip(client, "First")
        second = create_trip(client, "Second")

        listing = client.get("/api/trips").json()
        assert [t["name"] for t in listing["trips"]] == ["First", "Second"]
        assert listing["current_trip_id"] == second["id"]

        assert client.post(f"/api/trips/{first['id']}/select").json()["current_trip_id"] == first["id"]

        deleted = client.delete(f"/api/trips/{first['id']}").json()
        assert deleted["current_trip_id"] == second["id"]
        assert client.delete(f"/api/trips/{first['id']}").status_code == 404

    def test_expenses(self, client):
        trip = create_trip(client, budget=100)

        first = client.post(f"/api/trips/{trip['id']}/expenses", json={
            "title": "Croissant", "amount": 4.5, "category": "Food"
        }).json()
        assert first["exceeds_budget"] is False

        second = client.post(f"/api/trips/{trip['id']}/expenses", json={
            "title": "Opera", "amount": 120, "category": "Activity"
        }).json()
        assert second["exceeds_budget"] is True

        expense_id = first["expense"]["id"]
        updated = client.put(f"/api/trips/{trip['id']}/expenses/{expense_id}", json={
            "title": "Two croissants", "amount": 9, "category": "Food", "date": "2026-06-02"
        })
        assert updated.status_code == 200
        assert updated.json()["id"] == expense_id

        detail = client.get(f"/api/trips/{trip['id']}").json()
        assert detail["spent"] == 129
        assert detail["category_breakdown"][0] == {"category": "Activity", "amount": 120}

        assert client.delete(f"/api/trips/{trip['id']}/expenses/{expense_id}").json() == {"success": True}
        assert client.delete(f"/api/trips/{trip['id']}/expenses/{expense_id}").status_code == 404

    def test_expense_validation(self, client):
        trip = create_trip(client)
        response = client.post(f"/api/trips/{trip['id']}/expenses", json={"title": "", "amount": 5})
        assert response.status_code == 422

    def test_expense_category_must_be_known(self, client):
        trip = create_trip(client)

        response = client.post(f"/api/trips/{trip['id']}/expenses", json={
            "title": "Souvenir", "amount": 5, "category": "Knick-knacks"
        })

        assert response.status_code == 422
        assert client.get(f"/api/trips/{trip['id']}").json()["expenses"] == []

    def test_add_pin(self, client):
        trip = create_trip(client)

        pin = client.post(f"/api/trips/{trip['id']}/pins", json={
            "name": "Eiffel Tower", "latitude": 48.858, "longitude": 2.294, "cost_estimate": 30
        }).json()

        assert pin["coordinate"] == {"latitude": 48.858, "longitude": 2.294}
        assert len(client.get(f"/api/trips/{trip['id']}").json()["pins"]) == 1


class TestSuggestionEndpoints:
    """Test the AI endpoints against a fake service."""

    def test_location_details(self, client, ai):
        response = client.post("/api/ai/location-details", json={"latitude": 48.86, "longitude": 2.34})

        assert response.status_code == 200
        assert response.json()["fun_tip"] == "Skip the line"
        assert ai.calls[0][0] == "location"

    def test_expense_suggestion(self, client, ai):
        response = client.post("/api/ai/expense-suggestion", json={"title": "Baguette", "location": "Paris"})

        assert response.json() == {"category": "Food", "min_price": 2, "max_price": 5}
        assert ai.calls == [("expense", ("Baguette", "Paris"))]

    def test_budget_advice_uses_trip_figures(self, client, ai):
        trip = create_trip(client, budget=500)
        client.post(f"/api/trips/{trip['id']}/expenses", json={"title": "Hotel", "amount": 300})

        response = client.post(f"/api/trips/{trip['id']}/budget-advice")

        assert response.status_code == 200
        assert response.json()["watch_categories"] == ["Food"]
        name, (spent, total, remaining, expenses) = ai.calls[0]
        assert (spent, total, remaining) == (300, 500, 200)
        assert len(expenses) == 1

    def test_insights(self, client, ai):
        trip = create_trip(client)
        response = client.post(f"/api/trips/{trip['id']}/insights")

        assert response.json() == {"pattern": "p", "saving_tip": "s", "challenge": "c"}

    def test_network_failure_is_502(self, client, store):
        app.dependency_overrides[get_ai_service] = lambda: FakeAIService(fail=True)
        trip = create_trip(client)

        assert client.post("/api/ai/expense-suggestion", json={"title": "Taxi"}).status_code == 502
        assert client.post(f"/api/trips/{trip['id']}/insights").status_code == 502

    def test_pin_from_location(self, client, ai):
        trip = create_trip(client)

        response = client.post(
            f"/api/trips/{trip['id']}/pins/from-location",
            json={"latitude": 48.861, "longitude": 2.336}
        )

        assert response.status_code == 200
        pin = response.json()
        assert pin["name"] == "Louvre"
        assert pin["cost_estimate"] == 22
        assert pin["notes"] == "Skip the line"
        assert pin["coordinate"] == {"latitude": 48.861, "longitude": 2.336}
        assert ai.calls[0][0] == "location"
        assert client.get(f"/api/trips/{trip['id']}").json()["pins"] == [pin]

    def test_pin_from_location_unknown_trip(self, client, ai):
        response = client.post("/api/trips/nope/pins/from-location", json={"latitude": 1, "longitude": 1})

        assert response.status_code == 404
        assert ai.calls == []

    def test_pin_from_location_network_failure(self, client, store):
        app.dependency_overrides[get_ai_service] = lambda: FakeAIService(fail=True)
        trip = create_trip(client)

        response = client.post(f"/api/trips/{trip['id']}/pins/from-location", json={"latitude": 1, "longitude": 1})

        assert response.status_code == 502
        assert store.get(trip["id"]).pins == []


def gemini_backed_service(reply_text: str) -> AIService:
    """AIService whose Gemini and geocoding calls answer from memory."""
    settings = Settings(gemini_api_key="key", geocoding_api_key="key")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/geocode/json"):
            return httpx.Response(200, json={"results": [{"formatted_address": "Louvre, Paris"}]})
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": reply_text}]}}]})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AIService(settings, gemini=GeminiClient(settings, http), geocoder=GeocodingClient(settings, http))


class TestNonFiniteReplies:
    """Non-finite numbers in a reply never reach the response."""

    @pytest.mark.parametrize("reply", [
        '{"category": "Food", "minPrice": NaN, "maxPrice": 5}',
        '{"category": "Food", "minPrice": -Infinity, "maxPrice": Infinity}',
    ])
    def test_expense_suggestion_falls_back(self, client, reply):
        app.dependency_overrides[get_ai_service] = lambda: gemini_backed_service(reply)

        response = client.post("/api/ai/expense-suggestion", json={"title": "Baguette"})

        assert response.status_code == 200
        assert response.json() == {"category": "Other", "min_price": 0, "max_price": 100}

    def test_location_details_falls_back(self, client):
        app.dependency_overrides[get_ai_service] = lambda: gemini_backed_service('{"estimatedCost": NaN}')

        response = client.post("/api/ai/location-details", json={"latitude": 48.86, "longitude": 2.34})

        assert response.status_code == 200
        assert response.json()["estimated_cost"] == 50
        assert response.json()["name"] == "Louvre, Paris"
