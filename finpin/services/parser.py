"""
Tolerant parsing of Gemini replies.

The model is asked for JSON but answers in free text, so the JSON object is
cut out of the reply and read field by field. A missing or mistyped field
takes its default value. A reply with no decodable object yields a fully
canned result. Content problems never reach the caller.
"""
from typing import Any, Optional
import json
import logging
import math

from .errors import ParsingError
from ..models.suggestions import (
    BudgetAdvice,
    ExpenseSuggestion,
    LocationDetails,
    PlaceInfo,
    TripInsights,
)

logger = logging.getLogger(__name__)


# Canned results used when no JSON object can be decoded from the reply
FALLBACK_LOCATION = {
    "estimated_cost": 50.0,
    "duration": "2-3 hours",
    "best_time": "Anytime",
    "fun_tip": "Have a great time!",
}
FALLBACK_BUDGET_ADVICE = BudgetAdvice(
    message="You're doing great! Keep monitoring your spending.",
    suggestions=[],
    watch_categories=[]
)
FALLBACK_EXPENSE_SUGGESTION = ExpenseSuggestion(category="Other", min_price=0, max_price=100)
FALLBACK_TRIP_INSIGHTS = TripInsights(
    pattern="Interesting spending pattern!",
    saving_tip="Look for free activities",
    challenge="Explore like a local!"
)


def extract_json(text: str) -> str:
    """
    Cut the span from the first '{' to the last '}' out of the text.

    This is a plain scan, not brace matching: a reply holding two objects
    yields a span that will not decode.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ParsingError("No JSON object found in response")
    return text[start:end + 1]


def _reject_constant(name: str):
    raise ParsingError(f"Non-standard JSON constant {name} in response")


def decode_object(text: str) -> dict:
    """Decode the JSON object embedded in a reply; non-objects read as empty."""
    try:
        data = json.loads(extract_json(text), parse_constant=_reject_constant)
    except ValueError as e:
        raise ParsingError(f"Invalid JSON in response: {e}") from e
    return data if isinstance(data, dict) else {}


def read_str(data: dict, key: str, default: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def read_number(data: dict, key: str, default: float) -> float:
    value = data.get(key)
    # bool is an int subclass but never a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    try:
        number = float(value)
    except OverflowError:
        return default
    return number if math.isfinite(number) else default


def read_str_list(data: dict, key: str, default: list[str]) -> list[str]:
    value = data.get(key)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    return list(default)


def _decode_or_none(text: str, operation: str) -> Optional[dict[str, Any]]:
    try:
        return decode_object(text)
    except ParsingError as e:
        logger.warning(f"{operation}: using default result, {e}")
        return None


def parse_location_details(text: str, place: PlaceInfo) -> LocationDetails:
    """Read a location reply; name, city and country always come from `place`."""
    data = _decode_or_none(text, "location details")
    if data is None:
        fields = FALLBACK_LOCATION
    else:
        fields = {
            "estimated_cost": read_number(data, "estimatedCost", 0.0),
            "duration": read_str(data, "duration", "2-3 hours"),
            "best_time": read_str(data, "bestTime", "Morning"),
            "fun_tip": read_str(data, "funTip", "Enjoy your visit!"),
        }
    return LocationDetails(
        name=place.name,
        city=place.city,
        country=place.country,
        **fields
    )


def parse_budget_advice(text: str) -> BudgetAdvice:
    data = _decode_or_none(text, "budget advice")
    if data is None:
        return FALLBACK_BUDGET_ADVICE
    return BudgetAdvice(
        message=read_str(data, "message", "Keep tracking your expenses!"),
        suggestions=read_str_list(data, "suggestions", []),
        watch_categories=read_str_list(data, "watchCategories", [])
    )


def parse_expense_suggestion(text: str) -> ExpenseSuggestion:
    data = _decode_or_none(text, "expense suggestion")
    if data is None:
        return FALLBACK_EXPENSE_SUGGESTION
    return ExpenseSuggestion(
        category=read_str(data, "category", "Other"),
        min_price=read_number(data, "minPrice", 0.0),
        max_price=read_number(data, "maxPrice", 100.0)
    )


def parse_trip_insights(text: str) -> TripInsights:
    data = _decode_or_none(text, "trip insights")
    if data is None:
        return FALLBACK_TRIP_INSIGHTS
    return TripInsights(
        pattern=read_str(data, "pattern", "You're managing well!"),
        saving_tip=read_str(data, "savingTip", "Consider local markets for meals"),
        challenge=read_str(data, "challenge", "Try to discover one hidden gem!")
    )
