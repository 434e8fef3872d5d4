"""
AI Service - The four suggestion operations.

Each operation builds a prompt, asks Gemini and reads the reply tolerantly.
Transport failures propagate as NetworkError/NoResponseError. Malformed
content never does; it degrades to default values.
"""
from typing import Optional, Sequence
import logging

from .gemini_client import GeminiClient
from .geocoding import GeocodingClient
from .parser import (
    parse_budget_advice,
    parse_expense_suggestion,
    parse_location_details,
    parse_trip_insights,
)
from .prompts import (
    build_budget_prompt,
    build_expense_prompt,
    build_location_prompt,
    build_trip_insights_prompt,
)
from ..config import Settings
from ..models.suggestions import BudgetAdvice, ExpenseSuggestion, LocationDetails, TripInsights
from ..models.trip import Coordinate, Expense, Trip

logger = logging.getLogger(__name__)


class AIService:
    """Suggestion pipeline over the Gemini and geocoding APIs."""

    def __init__(
        self,
        settings: Settings,
        gemini: Optional[GeminiClient] = None,
        geocoder: Optional[GeocodingClient] = None
    ):
        self.gemini = gemini or GeminiClient(settings)
        self.geocoder = geocoder or GeocodingClient(settings)

    async def get_location_details(self, coordinate: Coordinate) -> LocationDetails:
        """Estimate cost and visiting tips for the place at a coordinate."""
        place = await self.geocoder.reverse_geocode(coordinate)
        response = await self.gemini.generate_text(build_location_prompt(place))
        return parse_location_details(response, place)

    async def get_budget_advice(
        self,
        spent: float,
        total: float,
        remaining: float,
        recent_expenses: Sequence[Expense]
    ) -> BudgetAdvice:
        """
        Ask for advice on the current spending.

        Only the first five expenses are sent. Raises ValueError before any
        network call if total is not positive.
        """
        prompt = build_budget_prompt(spent, total, remaining, recent_expenses)
        response = await self.gemini.generate_text(prompt)
        return parse_budget_advice(response)

    async def suggest_expense_details(self, title: str, location: Optional[str] = None) -> ExpenseSuggestion:
        response = await self.gemini.generate_text(build_expense_prompt(title, location))
        return parse_expense_suggestion(response)

    async def get_trip_insights(self, trip: Trip) -> TripInsights:
        logger.debug(f"Trip insights for {trip.name!r}, top category {trip.top_category}")
        response = await self.gemini.generate_text(build_trip_insights_prompt(trip))
        return parse_trip_insights(response)
