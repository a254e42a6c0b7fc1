"""Text generation providers used by the AI-assisted outfit composer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import google.generativeai as genai
import requests
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions
from pydantic import BaseModel, ValidationError

from stylist_app.config import StylistConfig

LOGGER = logging.getLogger(__name__)


class TextGenerationError(RuntimeError):
    """Raised when the generator cannot return usable text."""


class GenerationTimeoutError(TextGenerationError):
    """Raised when the generation call exceeds its timeout."""


class GenerationResponseError(TextGenerationError):
    """Raised for non-success responses or malformed payloads."""


class _GenerationPayload(BaseModel):
    text: str


class TextGenerator(ABC):
    """Abstract text generation interface."""

    @abstractmethod
    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        """Return generated text or raise :class:`TextGenerationError`."""


class GeminiTextGenerator(TextGenerator):
    """Generator backed by ``google-generativeai``."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout_seconds: float = 20.0,
        temperature: float = 0.4,
    ) -> None:
        if api_key:
            genai.configure(api_key=api_key)
        self.model_name = model
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature

    def _model(self, system_instruction: Optional[str]) -> genai.GenerativeModel:
        return genai.GenerativeModel(self.model_name, system_instruction=system_instruction)

    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        LOGGER.info("Requesting outfit text", extra={"model": self.model_name})
        try:
            response = self._model(system_instruction).generate_content(
                prompt,
                generation_config={"temperature": self.temperature},
                request_options={"timeout": self.timeout_seconds},
            )
        except google_exceptions.DeadlineExceeded as exc:
            raise GenerationTimeoutError(f"Generation timed out after {self.timeout_seconds}s") from exc
        except google_exceptions.GoogleAPIError as exc:
            raise TextGenerationError(f"Generation request failed: {exc}") from exc
        except google_auth_exceptions.GoogleAuthError as exc:
            raise TextGenerationError(f"Generation credentials unavailable: {exc}") from exc

        try:
            text = response.text
        except ValueError as exc:
            raise GenerationResponseError("Generation returned no usable candidates") from exc
        if not text or not text.strip():
            raise GenerationResponseError("Generation returned an empty body")
        return text


class HTTPTextGenerator(TextGenerator):
    """Generator calling a plain HTTP endpoint that answers ``{"text": ...}``."""

    def __init__(self, endpoint: str, api_key: str | None = None, timeout_seconds: float = 20.0) -> None:
        if not endpoint:
            raise ValueError("endpoint is required for HTTP text generation")
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        body = {"prompt": prompt}
        if system_instruction:
            body["system"] = system_instruction
        try:
            response = requests.post(
                self.endpoint, json=body, headers=self._headers(), timeout=self.timeout_seconds
            )
        except requests.Timeout as exc:
            raise GenerationTimeoutError(f"Generation timed out after {self.timeout_seconds}s") from exc
        except requests.RequestException as exc:
            raise TextGenerationError(f"Network error calling generator: {exc}") from exc

        if not 200 <= response.status_code < 300:
            LOGGER.warning("Generator returned status %s", response.status_code)
            raise GenerationResponseError(f"Generator returned status {response.status_code}")

        try:
            payload = _GenerationPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise GenerationResponseError("Generator payload failed schema validation") from exc
        if not payload.text.strip():
            raise GenerationResponseError("Generation returned an empty body")
        return payload.text


class StaticTextGenerator(TextGenerator):
    """Offline generator replaying canned responses, for tests and demos.

    Each call pops the next response; an exception instance in the queue is
    raised instead. The last entry is reused once the queue is exhausted.
    """

    def __init__(self, responses: List[str | Exception] | str | Exception) -> None:
        self.responses = list(responses) if isinstance(responses, list) else [responses]
        if not self.responses:
            raise ValueError("StaticTextGenerator needs at least one response")
        self.prompts: List[str] = []

    def generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def build_text_generator(config: StylistConfig) -> Optional[TextGenerator]:
    """Create the configured generator, or ``None`` for deterministic-only runs."""

    if config.generator_backend == "gemini":
        return GeminiTextGenerator(
            model=config.model,
            api_key=config.api_key,
            timeout_seconds=config.generation_timeout_seconds,
        )
    if config.generator_backend == "http":
        return HTTPTextGenerator(
            endpoint=config.generation_endpoint or "",
            api_key=config.generation_api_key,
            timeout_seconds=config.generation_timeout_seconds,
        )
    return None


__all__ = [
    "TextGenerator",
    "TextGenerationError",
    "GenerationTimeoutError",
    "GenerationResponseError",
    "GeminiTextGenerator",
    "HTTPTextGenerator",
    "StaticTextGenerator",
    "build_text_generator",
]
