"""Data models for the trip budget service."""
from .trip import Trip, Expense, TripPin, Coordinate, EXPENSE_CATEGORIES
from .suggestions import PlaceInfo, LocationDetails, BudgetAdvice, ExpenseSuggestion, TripInsights
from .store import TripStore, trip_store

__all__ = [
    "Trip",
    "Expense",
    "TripPin",
    "Coordinate",
    "EXPENSE_CATEGORIES",
    "PlaceInfo",
    "LocationDetails",
    "BudgetAdvice",
    "ExpenseSuggestion",
    "TripInsights",
    "TripStore",
    "trip_store",
]
