"""
Suggestion models - Typed results of the AI suggestion pipeline.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Suggestion(BaseModel):
    """Immutable value object built once per request."""
    model_config = ConfigDict(frozen=True)


class PlaceInfo(Suggestion):
    """Place resolved by reverse geocoding."""
    name: str = Field(..., description="Formatted address of the place")
    city: Optional[str] = None
    country: Optional[str] = None


class LocationDetails(Suggestion):
    """Cost estimate and visiting tips for a place."""
    name: str
    estimated_cost: float = Field(..., description="Typical cost of a visit")
    duration: str = Field(..., description="Time people usually spend, e.g. '2-3 hours'")
    best_time: str = Field(..., description="Best time of day to visit")
    fun_tip: str
    city: Optional[str] = None
    country: Optional[str] = None


class BudgetAdvice(Suggestion):
    """Friendly feedback on the current spending."""
    message: str
    suggestions: list[str] = Field(default_factory=list, description="Ways to save")
    watch_categories: list[str] = Field(
        default_factory=list,
        description="Categories worth keeping an eye on"
    )


class ExpenseSuggestion(Suggestion):
    """Guessed category and price range for an expense title."""
    category: str
    min_price: float
    max_price: float


class TripInsights(Suggestion):
    pattern: str
    saving_tip: str
    challenge: str
