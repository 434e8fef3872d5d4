"""
Trip models - Trips, their expenses and map pins.
"""
from pydantic import BaseModel, Field, computed_field, model_validator
import datetime
import uuid

from .suggestions import LocationDetails


EXPENSE_CATEGORIES = ["Food", "Transport", "Accommodation", "Activity", "Shopping", "Other"]


class Coordinate(BaseModel):
    """A point on the map in decimal degrees."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Expense(BaseModel):
    """A single logged expense."""
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique expense identifier"
    )
    title: str = Field(..., min_length=1, description="What the money was spent on")
    amount: float = Field(..., gt=0, description="Amount spent")
    category: str = Field(default="Other", description="Expense category, e.g. 'Food'")
    date: datetime.date = Field(default_factory=datetime.date.today, description="When it was spent")


class TripPin(BaseModel):
    """A place the traveller plans to visit."""
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique pin identifier"
    )
    name: str = Field(..., min_length=1)
    coordinate: Coordinate
    cost_estimate: float = Field(default=0.0, ge=0, description="Expected cost of the visit")
    notes: str = Field(default="", description="Tips or reminders for this place")

    @classmethod
    def from_location_details(cls, details: LocationDetails, coordinate: Coordinate) -> "TripPin":
        """Pin named after the place, costed and annotated from its details."""
        return cls(
            name=details.name,
            coordinate=coordinate,
            cost_estimate=max(details.estimated_cost, 0.0),
            notes=details.fun_tip
        )


class Trip(BaseModel):
    """A trip with a fixed budget."""
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique trip identifier"
    )
    name: str = Field(..., min_length=1)
    start_date: datetime.date
    end_date: datetime.date
    total_budget: float = Field(..., gt=0, description="Total budget for the trip")
    expenses: list[Expense] = Field(
        default_factory=list,
        description="Expenses in the order they were logged"
    )
    pins: list[TripPin] = Field(
        default_factory=list,
        description="Pinned places in the order they were added"
    )

    @model_validator(mode="after")
    def check_dates(self) -> "Trip":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @computed_field
    @property
    def spent(self) -> float:
        return sum(e.amount for e in self.expenses)

    @computed_field
    @property
    def remaining(self) -> float:
        return self.total_budget - self.spent

    @computed_field
    @property
    def duration(self) -> int:
        """Number of calendar days, counting both ends."""
        return (self.end_date - self.start_date).days + 1

    def category_breakdown(self) -> list[tuple[str, float]]:
        """
        Sum expenses per category, highest total first.

        Categories with equal totals keep the order in which they first
        appear in the expense list.
        """
        totals: dict[str, float] = {}
        for expense in self.expenses:
            totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
        return sorted(totals.items(), key=lambda item: item[1], reverse=True)

    @property
    def top_category(self) -> str:
        breakdown = self.category_breakdown()
        return breakdown[0][0] if breakdown else "General"

    def exceeds_remaining(self, amount: float) -> bool:
        """Whether spending `amount` would overrun the budget."""
        return amount > self.remaining
