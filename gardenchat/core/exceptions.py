"""
Error taxonomy shared by the pipeline stages and the API layer.

Every error carries the HTTP status it maps to and a message that is
safe to show to the end user.  Stages raise these; routes translate
them into JSON bodies (see gardenchat/api/errors.py).
"""

from __future__ import annotations

from typing import Any


class GardenChatError(Exception):
    """Base class for every classified failure."""

    status_code: int = 500
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InputValidationError(GardenChatError):
    """Malformed or missing question / filter payload."""

    status_code = 400
    default_message = "Invalid request."


class ServiceUnavailableError(GardenChatError):
    """The generation capability ran out of quota or balance."""

    status_code = 503
    default_message = "Service temporarily unavailable. Please try again later."


class NotFoundError(GardenChatError):
    status_code = 404
    default_message = "Not found."


class GardenNotFoundError(NotFoundError):
    default_message = "Garden not found."


class UpstreamError(GardenChatError):
    """A store or generation-capability failure not otherwise classified."""

    status_code = 500


class IntentExtractionError(UpstreamError):
    default_message = "Failed to parse question"


class PlantRetrievalError(UpstreamError):
    default_message = "Failed to execute query"


class TipSearchError(UpstreamError):
    """Tip lookup failed.  The orchestrator downgrades this to an empty list."""

    default_message = "Failed to search for related blog tips"


class GenerationError(UpstreamError):
    default_message = "Failed to generate an answer"
