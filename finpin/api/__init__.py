"""HTTP API for the trip budget service."""
from .routes import router

__all__ = ["router"]
