"""Language-model backed interpretation of free-text playlist requests."""

from __future__ import annotations

import logging
from typing import Any, Optional

import openai

from src.core.errors import UpstreamError
from src.models.dto import ParsedPrompt

from .response_parser import parse_model_response

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You turn playlist requests into search criteria for a music recommendation API.

Reply with a single JSON object and nothing else, using this schema:
{
  "bpm": <number> or {"min": <number>, "max": <number>},
  "genres": [<genre seed strings, lowercase, e.g. "house", "hip-hop">],
  "energy": "low" | "medium" | "high",
  "mood": <short free-text mood>,
  "playlistName": <a short, catchy playlist name>
}

Use a single bpm number when the request implies one tempo (for example a
running pace), and a {"min", "max"} range when it names a span. Omit fields
you cannot infer."""


class PromptInterpreter:
    """Ask a chat-completions model to translate a prompt into criteria."""

    def __init__(self, client: Any, model: str = "gpt-4o-mini", *, temperature: float = 0.2) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_api_key(cls, api_key: Optional[str], model: str) -> Optional["PromptInterpreter"]:
        if not api_key:
            logger.warning("OPENAI_API_KEY not set; free-text prompt parsing is disabled.")
            return None
        return cls(openai.OpenAI(api_key=api_key, max_retries=0), model=model)

    def complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
            )
        except openai.OpenAIError as exc:
            logger.error("Language model call failed: %s", exc, exc_info=True)
            raise UpstreamError(
                "language_model",
                "prompt completion",
                status=getattr(exc, "status_code", None),
                detail=str(exc),
            ) from exc

        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError) as exc:
            logger.error("Unexpected language model response shape: %r", response)
            raise UpstreamError("language_model", "prompt completion", detail=str(exc)) from exc

    def interpret(self, prompt: str) -> ParsedPrompt:
        text = self.complete(prompt)
        logger.debug("Language model replied with %d characters", len(text))
        return parse_model_response(text)


__all__ = ["PromptInterpreter", "SYSTEM_PROMPT"]
