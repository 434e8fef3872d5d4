"""
Gemini Client - Single-shot calls to the generateContent endpoint.
"""
from typing import Optional
import logging

import httpx
from pydantic import BaseModel, ValidationError

from .errors import NetworkError, NoResponseError, ParsingError
from ..config import Settings

logger = logging.getLogger(__name__)


# Reply envelope; every level may be missing
class GeminiPart(BaseModel):
    text: Optional[str] = None


class GeminiContent(BaseModel):
    parts: Optional[list[GeminiPart]] = None


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None


class GeminiResponse(BaseModel):
    candidates: Optional[list[GeminiCandidate]] = None

    def first_text(self) -> Optional[str]:
        """Text of the first part of the first candidate, if any."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


class GeminiClient:
    """Async client for the Gemini generative language API."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.url = f"{settings.gemini_base_url.rstrip('/')}/v1beta/models/{self.model}:generateContent"
        self.timeout = settings.http_timeout_seconds
        self._http = http_client

        logger.debug(f"Initializing GeminiClient with model={self.model}")

    async def generate_text(self, prompt: str) -> str:
        """
        Send a prompt and return the generated text.

        Raises:
            NetworkError: the endpoint could not be reached
            ParsingError: the reply is not a JSON envelope of the expected shape
            NoResponseError: the envelope holds no text
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        params = {"key": self.api_key}

        logger.debug(f"Gemini request: {len(prompt)} chars to {self.model}")
        try:
            if self._http is not None:
                response = await self._http.post(self.url, params=params, json=payload, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.url, params=params, json=payload)
        except httpx.RequestError as e:
            logger.error(f"Gemini Error: {e}")
            raise NetworkError(f"Could not reach Gemini: {e}") from e

        if response.is_error:
            logger.warning(f"Gemini returned HTTP {response.status_code}")

        try:
            envelope = GeminiResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ParsingError(f"Unexpected Gemini response: {e}") from e

        text = envelope.first_text()
        if not text:
            raise NoResponseError("Gemini returned no text")
        return text
