import logging
from typing import Any, Optional

import requests

from settings import Settings

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to generate content."
NO_CONTENT_MESSAGE = "No content generated. Please try again."


# =============================================================================
# ERRORS
# =============================================================================
class GenerationError(Exception):
    """Base class for every failure of a generation call."""

    @property
    def user_message(self) -> str:
        return str(self) or GENERIC_FAILURE_MESSAGE


class TransportError(GenerationError):
    """The call failed outright: connection problem or non-success status."""

    def __init__(self, status_code: Optional[int] = None, server_message: Optional[str] = None):
        super().__init__(server_message or GENERIC_FAILURE_MESSAGE)
        self.status_code = status_code
        self.server_message = server_message

    @property
    def user_message(self) -> str:
        return self.server_message or GENERIC_FAILURE_MESSAGE


class MalformedResponseError(GenerationError):
    """The call succeeded but the body has no generated text."""

    @property
    def user_message(self) -> str:
        return NO_CONTENT_MESSAGE


# =============================================================================
# PAYLOAD HELPERS
# =============================================================================
def build_payload(prompt: str) -> dict:
    """Wrap a prompt as the single user turn of a generateContent request."""
    chat_history = [{"role": "user", "parts": [{"text": prompt}]}]
    return {"contents": chat_history}


def extract_text(body: Any) -> str:
    """
    Pull the generated string out of a generateContent response.

    Args:
        body: The decoded JSON response.

    Returns:
        str: ``candidates[0].content.parts[0].text``.

    Raises:
        MalformedResponseError: If any level of that path is missing or the
            text itself is empty.
    """
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponseError(NO_CONTENT_MESSAGE) from None
    if not isinstance(text, str) or not text:
        raise MalformedResponseError(NO_CONTENT_MESSAGE)
    return text


def extract_error_message(response: requests.Response) -> Optional[str]:
    """Return ``error.message`` from an error body, or None if there isn't one."""
    try:
        body = response.json()
    except ValueError:
        return None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) and message else None


# =============================================================================
# CLIENT
# =============================================================================
class GeminiClient:
    def __init__(self, settings: Settings):
        self.base_url = settings.base_url.rstrip("/")
        self.model = settings.model
        self.api_key = settings.api_key
        self.timeout = settings.timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """
        Send one prompt to the model and return the generated text.

        Args:
            prompt (str): The user's prompt, sent as-is.

        Returns:
            str: The generated text.

        Raises:
            TransportError: On connection failure or a non-success status.
            MalformedResponseError: If the success body carries no text.
        """
        logger.info("Requesting generation from %s (%d chars)", self.model, len(prompt))
        try:
            response = requests.post(
                self.url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=build_payload(prompt),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Generation request failed: %s", e)
            raise TransportError() from e

        logger.info("Generation response status: %s", response.status_code)
        if not response.ok:
            server_message = extract_error_message(response)
            logger.warning("Generation failed with status %s: %s", response.status_code, server_message)
            raise TransportError(response.status_code, server_message)

        try:
            body = response.json()
        except ValueError:
            logger.warning("Generation response was not valid JSON")
            raise MalformedResponseError(NO_CONTENT_MESSAGE) from None

        try:
            return extract_text(body)
        except MalformedResponseError:
            logger.warning("Generation response contained no text")
            raise
