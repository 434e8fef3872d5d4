"""Services for the trip budget backend."""
from .ai_service import AIService
from .gemini_client import GeminiClient
from .geocoding import GeocodingClient
from .errors import AIServiceError, NetworkError, NoResponseError, ParsingError

__all__ = [
    "AIService",
    "GeminiClient",
    "GeocodingClient",
    "AIServiceError",
    "NetworkError",
    "NoResponseError",
    "ParsingError",
]
