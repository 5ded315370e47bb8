"""OpenAI client used to suggest tags for event descriptions."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from openai import OpenAI, OpenAIError

from campushub.config import get_settings
from campushub.schemas import load_event_tags_schema

logger = logging.getLogger(__name__)

_CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$")

SYSTEM_PROMPT = (
    "You answer ONLY with valid JSON that matches the given schema. "
    "Do not include any text outside the JSON."
)


def build_tag_prompt(description: str) -> str:
    return (
        "You are an event tag suggestion expert. Given an event description, "
        "you will suggest relevant tags for the event.\n\n"
        f"Description: {description}\n\n"
        "Suggest at least 5 tags. The tags should be short and descriptive. "
        "The tags should be suitable for filtering and searching events. "
        "Return a JSON array of strings."
    )


def _strip_code_fences(text: str) -> str:
    return _CODE_FENCE_PATTERN.sub("", text.strip())


class OpenAIConfigurationError(RuntimeError):
    """Raised when the OpenAI credentials are missing."""


class OpenAIServiceError(RuntimeError):
    """Raised when the OpenAI API does not answer as expected."""


class TagSuggestionService:
    """Request tag suggestions through the Responses API."""

    def __init__(self) -> None:
        settings = get_settings()

        api_key = (settings.openai_api_key or "").strip()
        if not api_key:
            raise OpenAIConfigurationError(
                "OPENAI_API_KEY is not defined in the environment.",
            )

        base_url = (settings.openai_base_url or "").strip()
        max_output_tokens = settings.openai_max_output_tokens
        if max_output_tokens is not None and max_output_tokens <= 0:
            max_output_tokens = None

        client_kwargs: dict[str, Any] = {"api_key": api_key}
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)
        self._model = (settings.openai_model or "gpt-4.1-mini").strip() or "gpt-4.1-mini"
        self._temperature = float(settings.openai_temperature)
        self._max_output_tokens = max_output_tokens

    def suggest_tags(self, description: str) -> dict[str, list[str]]:
        """Return ``{"tags": [...]}`` as produced by the model."""

        messages = [
            {"role": "system", "content": [{"type": "input_text", "text": SYSTEM_PROMPT}]},
            {
                "role": "user",
                "content": [{"type": "input_text", "text": build_tag_prompt(description)}],
            },
        ]
        request_kwargs: dict[str, Any] = {
            "model": self._model,
            "input": messages,
            "temperature": self._temperature,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "event_tags",
                    "strict": True,
                    "schema": load_event_tags_schema(),
                }
            },
        }
        if self._max_output_tokens is not None:
            request_kwargs["max_output_tokens"] = self._max_output_tokens

        try:
            resp = self._client.responses.create(**request_kwargs)
        except OpenAIError as exc:
            logger.error("Tag suggestion request failed: %s", exc)
            raise OpenAIServiceError("Could not complete the request to OpenAI.") from exc

        text = getattr(resp, "output_text", None)
        if not text:
            try:
                text = resp.output[0].content[0].text
            except (AttributeError, IndexError, TypeError) as exc:
                raise OpenAIServiceError("The OpenAI response has no usable text.") from exc

        logger.debug("Raw tag suggestion response: %s", text)

        try:
            payload = json.loads(_strip_code_fences(text))
        except json.JSONDecodeError as exc:
            logger.error("Could not decode the OpenAI response: %s", text)
            raise OpenAIServiceError("The OpenAI response is not valid JSON.") from exc

        tags = payload.get("tags") if isinstance(payload, dict) else None
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise OpenAIServiceError("The OpenAI response does not contain a 'tags' list.")

        return {"tags": tags}


__all__ = [
    "OpenAIConfigurationError",
    "OpenAIServiceError",
    "TagSuggestionService",
    "build_tag_prompt",
]
