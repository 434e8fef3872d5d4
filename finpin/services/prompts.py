"""
Prompt builders for the Gemini suggestion calls.

Every builder is a pure function: the same input always yields the same
prompt text. Each prompt ends with the JSON keys the reply must use, which
are the keys the parser reads back.
"""
from typing import Optional, Sequence

from ..models.suggestions import PlaceInfo
from ..models.trip import Expense, Trip, EXPENSE_CATEGORIES


# Only this many expenses are shown to the model
RECENT_EXPENSE_LIMIT = 5

# Percent spent above which the prompt flags the budget as tight
BUDGET_WARNING_PERCENT = 75

BUDGET_WARNING_LINE = "I'm getting close to my limit! 😅"


LOCATION_PROMPT = """You're my friendly travel buddy helping me plan my trip! 🎒

I'm visiting {name} in {city}.

Can you tell me:
1. Typical cost to visit this place (entry fees, activities)
2. Average time people spend here
3. Best time of day to visit
4. One fun tip or must-do thing here

Keep it short and friendly, like you're texting a friend!
Format the response as JSON with keys: estimatedCost, duration, bestTime, funTip"""


BUDGET_PROMPT = """Hey! You're my friendly budget buddy helping me stay on track during my trip! 💰

Here's my situation:
- Total budget: ${total}
- Already spent: ${spent} ({percent}%)
- Remaining: ${remaining}
- Recent expenses: {expenses}

{warning}

Can you:
1. Give me a friendly heads up about my spending
2. If I'm overspending, suggest 2-3 practical ways to save
3. Recommend what categories I should watch out for

Talk to me like a friend who cares but isn't judgy! Keep it real and helpful.
Format as JSON with keys: message, suggestions (array), watchCategories (array)"""


EXPENSE_PROMPT = """Quick help! I just made a purchase: "{title}"
{location}

Can you guess:
1. What category this belongs to ({categories})
2. Typical price range for this

Just give me your best guess!
Format as JSON with keys: category, minPrice, maxPrice"""


TRIP_INSIGHTS_PROMPT = """Hey travel friend! 🌍 Quick check-in on my {name} trip:

- Days: {days}
- Budget: ${budget}
- Spent so far: ${spent}
- Mostly spending on: {top_category}
- Places pinned: {pin_count}

Give me:
1. A friendly one-liner about my spending pattern
2. One money-saving tip based on what you see
3. A fun challenge or goal for the rest of my trip

Keep it encouraging and fun!
Format as JSON with keys: pattern, savingTip, challenge"""


def percent_spent(spent: float, total: float) -> float:
    """Share of the budget already spent, in percent."""
    if total <= 0:
        raise ValueError(f"Total budget must be positive, got {total}")
    return spent / total * 100


def format_expenses(expenses: Sequence[Expense]) -> str:
    """Render the first few expenses as 'Category: $amount' pairs."""
    return ", ".join(
        f"{e.category}: ${e.amount}" for e in expenses[:RECENT_EXPENSE_LIMIT]
    )


def build_location_prompt(place: PlaceInfo) -> str:
    return LOCATION_PROMPT.format(
        name=place.name,
        city=place.city or "this location"
    )


def build_budget_prompt(
    spent: float,
    total: float,
    remaining: float,
    recent_expenses: Sequence[Expense]
) -> str:
    """
    Build the budget advice prompt.

    Raises:
        ValueError: if total is not positive
    """
    percent = percent_spent(spent, total)
    return BUDGET_PROMPT.format(
        total=int(total),
        spent=int(spent),
        percent=int(percent),
        remaining=int(remaining),
        expenses=format_expenses(recent_expenses),
        warning=BUDGET_WARNING_LINE if percent > BUDGET_WARNING_PERCENT else ""
    )


def build_expense_prompt(title: str, location: Optional[str] = None) -> str:
    return EXPENSE_PROMPT.format(
        title=title,
        location=f"Location: {location}" if location is not None else "",
        categories="/".join(EXPENSE_CATEGORIES)
    )


def build_trip_insights_prompt(trip: Trip) -> str:
    return TRIP_INSIGHTS_PROMPT.format(
        name=trip.name,
        days=trip.duration,
        budget=int(trip.total_budget),
        spent=int(trip.spent),
        top_category=trip.top_category,
        pin_count=len(trip.pins)
    )
