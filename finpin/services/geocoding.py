"""
Geocoding Service.
Resolves a map coordinate to a place name with the Google Geocoding API.
"""
from typing import Optional
import logging

import httpx
from pydantic import BaseModel, ValidationError

from .errors import NetworkError, ParsingError
from ..config import Settings
from ..models.suggestions import PlaceInfo
from ..models.trip import Coordinate

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"


class AddressComponent(BaseModel):
    long_name: Optional[str] = None
    types: Optional[list[str]] = None


class GeocodeResult(BaseModel):
    formatted_address: Optional[str] = None
    address_components: Optional[list[AddressComponent]] = None

    def component(self, kind: str) -> Optional[str]:
        """Long name of the first address component of the given type."""
        for component in self.address_components or []:
            if kind in (component.types or []):
                return component.long_name
        return None


class GeocodeResponse(BaseModel):
    results: Optional[list[GeocodeResult]] = None


class GeocodingClient:
    """Async client for reverse geocoding."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = settings.geocoding_api_key
        self.url = f"{settings.geocoding_base_url.rstrip('/')}/maps/api/geocode/json"
        self.timeout = settings.http_timeout_seconds
        self._http = http_client

    async def reverse_geocode(self, coordinate: Coordinate) -> PlaceInfo:
        """
        Look up the place at a coordinate.

        An empty result list is not an error: it yields "Unknown Location"
        with no city or country.
        """
        params = {
            "latlng": f"{coordinate.latitude},{coordinate.longitude}",
            "key": self.api_key
        }

        try:
            if self._http is not None:
                response = await self._http.get(self.url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url, params=params)
        except httpx.RequestError as e:
            logger.error(f"Geocoding Error: {e}")
            raise NetworkError(f"Could not reach geocoding API: {e}") from e

        try:
            data = GeocodeResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ParsingError(f"Unexpected geocoding response: {e}") from e

        if not data.results:
            logger.info(f"No geocoding results for {params['latlng']}")
            return PlaceInfo(name=UNKNOWN_LOCATION)

        result = data.results[0]
        return PlaceInfo(
            name=result.formatted_address or UNKNOWN_LOCATION,
            city=result.component("locality"),
            country=result.component("country")
        )
