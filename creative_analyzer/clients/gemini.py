"""Gemini client for structured creative analysis."""

import json
from typing import Any

from google import genai
from google.genai import types


class ConfigurationError(Exception):
    """Required credential is missing."""

    pass


class RemoteRejection(Exception):
    """The model returned no content (blocked, truncated or empty)."""

    def __init__(self, finish_reason: str | None):
        self.finish_reason = finish_reason
        super().__init__(f"Empty Gemini response (finish_reason={finish_reason})")


class GeminiClient:
    """Client for multimodal JSON analysis via Google's Gemini models."""

    def __init__(self, api_key: str | None, model: str = "gemini-2.5-flash"):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        self.client = genai.Client(api_key=api_key)
        self.model = model

    def generate_json(
        self,
        prompt: str,
        media: bytes,
        mime_type: str,
        schema: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Send a prompt plus one image/video and return the parsed JSON answer.

        Args:
            prompt: Full analysis instructions.
            media: Creative bytes (sent inline).
            mime_type: Declared media type of the creative.
            schema: Response schema the JSON must follow.

        Returns:
            Parsed JSON object.

        Raises:
            RemoteRejection: if the response has no text.
            json.JSONDecodeError: if the text is not valid JSON.
        """
        contents = [prompt, types.Part.from_bytes(data=media, mime_type=mime_type)]

        response = self.client.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )

        if not response.text:
            raise RemoteRejection(_finish_reason(response))

        return json.loads(_strip_code_fence(response.text))

    def generate_text(self, system_prompt: str, prompt: str) -> str:
        """
        Plain text completion, used for the winner insights.

        Raises:
            RemoteRejection: if the response has no text.
        """
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(system_instruction=system_prompt),
        )

        if not response.text:
            raise RemoteRejection(_finish_reason(response))
        return response.text.strip()


def _finish_reason(response) -> str | None:
    if not response.candidates:
        return None
    reason = response.candidates[0].finish_reason
    return getattr(reason, "value", reason)


def _strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` wrapper if the model added one."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()
