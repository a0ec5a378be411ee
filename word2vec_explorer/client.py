from __future__ import annotations

from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI

from .config import Settings, settings as default_settings
from .errors import (
    AuthenticationFailure,
    ClientNotConfigured,
    EmptyInput,
    MalformedResponse,
    TransportFailure,
)
from .logger import get_logger
from .models import RelatedWordSet
from .normalize import normalize
from .prompts import build_prompt

_INVALID_KEY_MARKER = "API key not valid"

logger = get_logger()


def _is_auth_failure(err: Exception) -> bool:
    return isinstance(err, openai.AuthenticationError) or _INVALID_KEY_MARKER in str(err)


class WordRelationClient:
    """Asks a hosted chat model for words related to a target word.

    One request per call: no retry and no caching, so the same word asked
    twice costs two remote calls. ``client`` may be any object exposing an
    async ``chat.completions.create``; it defaults to an ``AsyncOpenAI``
    pointed at ``settings.base_url``.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Any = None) -> None:
        self._settings = settings or default_settings
        self._client = client

    @property
    def configured(self) -> bool:
        return self._settings.configured

    @property
    def model(self) -> str:
        return self._settings.model

    def _get_client(self) -> Any:
        if self._client is None:
            options: Dict[str, Any] = {
                "api_key": self._settings.api_key,
                "base_url": self._settings.base_url,
                "max_retries": 0,
            }
            if self._settings.timeout_seconds is not None:
                options["timeout"] = self._settings.timeout_seconds
            self._client = AsyncOpenAI(**options)
        return self._client

    def _request_options(self, prompt: str) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "model": self._settings.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._settings.temperature,
        }
        if self._settings.json_mode:
            options["response_format"] = {"type": "json_object"}
        return options

    async def fetch_related_words(self, target_word: str) -> RelatedWordSet:
        if not self.configured:
            raise ClientNotConfigured("No API key configured; refusing to call the model")

        word = (target_word or "").strip()
        if not word:
            raise EmptyInput("Target word is blank")

        logger.info("Requesting related words for %r from %s", word, self._settings.model)
        try:
            response = await self._get_client().chat.completions.create(
                **self._request_options(build_prompt(word))
            )
        except Exception as err:
            logger.warning("Error fetching related words: %s", err)
            if _is_auth_failure(err):
                raise AuthenticationFailure(str(err)) from err
            raise TransportFailure(
                str(err),
                user_message=f"An error occurred during the generative API request: {err}",
            ) from err

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise MalformedResponse("Model returned an empty response")
        return normalize(content)
