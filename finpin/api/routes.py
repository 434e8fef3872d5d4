"""
API Routes for the trip budget service.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from typing import Optional
import datetime

from ..config import get_settings
from ..models.store import TripStore, trip_store
from ..models.suggestions import BudgetAdvice, ExpenseSuggestion, LocationDetails, TripInsights
from ..models.trip import Coordinate, Expense, Trip, TripPin, EXPENSE_CATEGORIES
from ..services.ai_service import AIService
from ..services.errors import AIServiceError


router = APIRouter(prefix="/api", tags=["finpin"])


def get_trip_store() -> TripStore:
    return trip_store


def get_ai_service() -> AIService:
    return AIService(get_settings())


# Request/Response Models
class CreateTripRequest(BaseModel):
    name: str = Field(..., min_length=1)
    start_date: datetime.date
    end_date: datetime.date
    total_budget: float = Field(..., gt=0)


class ExpenseRequest(BaseModel):
    title: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: str = "Other"
    date: Optional[datetime.date] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value: str) -> str:
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(EXPENSE_CATEGORIES)}")
        return value


class PinRequest(BaseModel):
    name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    cost_estimate: float = Field(default=0.0, ge=0)
    notes: str = ""


class ExpenseSuggestionRequest(BaseModel):
    title: str = Field(..., min_length=1)
    location: Optional[str] = None


class TripListResponse(BaseModel):
    trips: list[Trip]
    current_trip_id: Optional[str] = None


class ExpenseResponse(BaseModel):
    expense: Expense
    exceeds_budget: bool


# Helpers

def _require_trip(store: TripStore, trip_id: str) -> Trip:
    trip = store.get(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


def _trip_detail(trip: Trip) -> dict:
    detail = trip.model_dump(mode="json")
    detail["category_breakdown"] = [
        {"category": category, "amount": amount}
        for category, amount in trip.category_breakdown()
    ]
    return detail


def _to_expense(request: ExpenseRequest) -> Expense:
    fields = request.model_dump(exclude_none=True)
    return Expense(**fields)


def _upstream_error(e: AIServiceError) -> HTTPException:
    return HTTPException(status_code=502, detail=f"AI service unavailable: {str(e)}")


# Trip endpoints

@router.post("/trips")
async def create_trip(request: CreateTripRequest, store: TripStore = Depends(get_trip_store)):
    """Create a trip and make it the current one."""
    if request.end_date < request.start_date:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")
    trip = store.add(Trip(**request.model_dump()))
    return _trip_detail(trip)


@router.get("/trips", response_model=TripListResponse)
async def list_trips(store: TripStore = Depends(get_trip_store)):
    return TripListResponse(trips=store.list_trips(), current_trip_id=store.current_trip_id)


@router.get("/trips/current")
async def get_current_trip(store: TripStore = Depends(get_trip_store)):
    trip = store.current_trip
    if not trip:
        raise HTTPException(status_code=404, detail="No current trip")
    return _trip_detail(trip)


@router.get("/trips/{trip_id}")
async def get_trip(trip_id: str, store: TripStore = Depends(get_trip_store)):
    """Get a trip with its budget figures."""
    return _trip_detail(_require_trip(store, trip_id))


@router.delete("/trips/{trip_id}")
async def delete_trip(trip_id: str, store: TripStore = Depends(get_trip_store)):
    if not store.delete(trip_id):
        raise HTTPException(status_code=404, detail="Trip not found")
    return {"success": True, "current_trip_id": store.current_trip_id}


@router.post("/trips/{trip_id}/select")
async def select_trip(trip_id: str, store: TripStore = Depends(get_trip_store)):
    trip = store.select(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return {"success": True, "current_trip_id": trip.id}


# Expense and pin endpoints

@router.post("/trips/{trip_id}/expenses", response_model=ExpenseResponse)
async def add_expense(trip_id: str, request: ExpenseRequest, store: TripStore = Depends(get_trip_store)):
    """Log an expense; flags it when it overruns the remaining budget."""
    trip = _require_trip(store, trip_id)
    expense = _to_expense(request)
    exceeds = trip.exceeds_remaining(expense.amount)
    store.add_expense(trip_id, expense)
    return ExpenseResponse(expense=expense, exceeds_budget=exceeds)


@router.put("/trips/{trip_id}/expenses/{expense_id}", response_model=Expense)
async def update_expense(
    trip_id: str,
    expense_id: str,
    request: ExpenseRequest,
    store: TripStore = Depends(get_trip_store)
):
    _require_trip(store, trip_id)
    updated = store.update_expense(trip_id, expense_id, _to_expense(request))
    if not updated:
        raise HTTPException(status_code=404, detail="Expense not found")
    return updated


@router.delete("/trips/{trip_id}/expenses/{expense_id}")
async def delete_expense(trip_id: str, expense_id: str, store: TripStore = Depends(get_trip_store)):
    _require_trip(store, trip_id)
    if not store.delete_expense(trip_id, expense_id):
        raise HTTPException(status_code=404, detail="Expense not found")
    return {"success": True}


@router.post("/trips/{trip_id}/pins", response_model=TripPin)
async def add_pin(trip_id: str, request: PinRequest, store: TripStore = Depends(get_trip_store)):
    _require_trip(store, trip_id)
    pin = TripPin(
        name=request.name,
        coordinate=Coordinate(latitude=request.latitude, longitude=request.longitude),
        cost_estimate=request.cost_estimate,
        notes=request.notes
    )
    store.add_pin(trip_id, pin)
    return pin


@router.post("/trips/{trip_id}/pins/from-location", response_model=TripPin)
async def add_pin_from_location(
    trip_id: str,
    coordinate: Coordinate,
    store: TripStore = Depends(get_trip_store),
    ai: AIService = Depends(get_ai_service)
):
    """Pin a tapped map location, filled in from its AI location details."""
    _require_trip(store, trip_id)
    try:
        details = await ai.get_location_details(coordinate)
    except AIServiceError as e:
        raise _upstream_error(e)
    pin = store.add_pin(trip_id, TripPin.from_location_details(details, coordinate))
    if not pin:
        raise HTTPException(status_code=404, detail="Trip not found")
    return pin


# AI suggestion endpoints

@router.post("/ai/location-details", response_model=LocationDetails)
async def location_details(coordinate: Coordinate, ai: AIService = Depends(get_ai_service)):
    """Cost estimate and tips for a tapped map location."""
    try:
        return await ai.get_location_details(coordinate)
    except AIServiceError as e:
        raise _upstream_error(e)


@router.post("/ai/expense-suggestion", response_model=ExpenseSuggestion)
async def expense_suggestion(request: ExpenseSuggestionRequest, ai: AIService = Depends(get_ai_service)):
    try:
        return await ai.suggest_expense_details(request.title, request.location)
    except AIServiceError as e:
        raise _upstream_error(e)


@router.post("/trips/{trip_id}/budget-advice", response_model=BudgetAdvice)
async def budget_advice(
    trip_id: str,
    store: TripStore = Depends(get_trip_store),
    ai: AIService = Depends(get_ai_service)
):
    """Budget advice based on the trip's spending so far."""
    trip = _require_trip(store, trip_id)
    try:
        return await ai.get_budget_advice(
            spent=trip.spent,
            total=trip.total_budget,
            remaining=trip.remaining,
            recent_expenses=trip.expenses
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except AIServiceError as e:
        raise _upstream_error(e)


@router.post("/trips/{trip_id}/insights", response_model=TripInsights)
async def trip_insights(
    trip_id: str,
    store: TripStore = Depends(get_trip_store),
    ai: AIService = Depends(get_ai_service)
):
    trip = _require_trip(store, trip_id)
    try:
        return await ai.get_trip_insights(trip)
    except AIServiceError as e:
        raise _upstream_error(e)
