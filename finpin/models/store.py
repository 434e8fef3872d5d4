"""
Trip store - In-memory registry of trips and the current selection.
"""
from typing import Optional
from datetime import date, timedelta

from .trip import Coordinate, Expense, Trip, TripPin


class TripStore:
    """Simple in-memory trip store."""

    def __init__(self):
        self._trips: dict[str, Trip] = {}
        self.current_trip_id: Optional[str] = None

    def add(self, trip: Trip) -> Trip:
        """Add a trip and make it the current one."""
        self._trips[trip.id] = trip
        self.current_trip_id = trip.id
        return trip

    def get(self, trip_id: str) -> Optional[Trip]:
        """Get a trip by ID."""
        return self._trips.get(trip_id)

    def list_trips(self) -> list[Trip]:
        """All trips in creation order."""
        return list(self._trips.values())

    def select(self, trip_id: str) -> Optional[Trip]:
        """Make a trip the current one."""
        trip = self._trips.get(trip_id)
        if trip is not None:
            self.current_trip_id = trip_id
        return trip

    @property
    def current_trip(self) -> Optional[Trip]:
        if self.current_trip_id is None:
            return None
        return self._trips.get(self.current_trip_id)

    def delete(self, trip_id: str) -> bool:
        """Delete a trip; the selection falls back to the first remaining trip."""
        if self._trips.pop(trip_id, None) is None:
            return False
        if self.current_trip_id == trip_id:
            self.current_trip_id = next(iter(self._trips), None)
        return True

    def add_expense(self, trip_id: str, expense: Expense) -> Optional[Expense]:
        trip = self._trips.get(trip_id)
        if trip is None:
            return None
        trip.expenses.append(expense)
        return expense

    def update_expense(self, trip_id: str, expense_id: str, updated: Expense) -> Optional[Expense]:
        """Replace an expense, keeping its ID and its position in the list."""
        trip = self._trips.get(trip_id)
        if trip is None:
            return None
        for index, expense in enumerate(trip.expenses):
            if expense.id == expense_id:
                replacement = updated.model_copy(update={"id": expense_id})
                trip.expenses[index] = replacement
                return replacement
        return None

    def delete_expense(self, trip_id: str, expense_id: str) -> bool:
        trip = self._trips.get(trip_id)
        if trip is None:
            return False
        for index, expense in enumerate(trip.expenses):
            if expense.id == expense_id:
                del trip.expenses[index]
                return True
        return False

    def add_pin(self, trip_id: str, pin: TripPin) -> Optional[TripPin]:
        trip = self._trips.get(trip_id)
        if trip is None:
            return None
        trip.pins.append(pin)
        return pin


def build_demo_trip(today: Optional[date] = None) -> Trip:
    """The sample trip a fresh install starts with."""
    today = today or date.today()
    return Trip(
        name="NYC Adventure",
        start_date=today,
        end_date=today + timedelta(days=3),
        total_budget=2500,
        expenses=[
            Expense(title="Hotel Booking", amount=600, category="Accommodation", date=today),
            Expense(title="Flight Tickets", amount=450, category="Transport", date=today),
            Expense(title="Dinner at Times Square", amount=120, category="Food", date=today),
            Expense(title="Broadway Show", amount=250, category="Activity", date=today),
            Expense(title="Museum Tickets", amount=50, category="Activity", date=today),
        ],
        pins=[
            TripPin(
                name="Times Square",
                coordinate=Coordinate(latitude=40.7580, longitude=-73.9855),
                cost_estimate=200
            ),
            TripPin(
                name="Central Park",
                coordinate=Coordinate(latitude=40.7829, longitude=-73.9654),
                cost_estimate=0
            ),
            TripPin(
                name="Statue of Liberty",
                coordinate=Coordinate(latitude=40.6892, longitude=-74.0445),
                cost_estimate=50
            ),
        ]
    )


# Global trip store
trip_store = TripStore()
