"""Errors raised by the AI suggestion pipeline."""


class AIServiceError(Exception):
    """Base class for suggestion pipeline failures."""


class NetworkError(AIServiceError):
    """An external endpoint could not be reached."""


class NoResponseError(AIServiceError):
    """The generative endpoint replied without any text."""


class ParsingError(AIServiceError):
    """A reply could not be decoded into the expected shape."""
