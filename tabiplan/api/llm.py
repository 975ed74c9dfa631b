"""Text-generation gateway for plan suggestions.

The gateway is the only piece that talks to OpenAI. It receives its API key
from whoever builds it (see ``tabiplan.app.create_app``); nothing in here
reads the environment, so the services can be exercised with a stub.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import openai
from openai import OpenAI

from tabiplan.api.errors import GatewayError
from tabiplan.api.models import SuggestionRequest
from tabiplan.api.prompts import SYSTEM_INSTRUCTION, compose_contents

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1"

ERROR_MESSAGE_TEMPLATE = (
    "エラーが発生しました: {detail}\n\n"
    "APIキーが有効か、または正しく設定されているか確認してください。"
)
UNKNOWN_ERROR_MESSAGE = "APIの呼び出し中に不明なエラーが発生しました。"


def format_gateway_error(error: GatewayError) -> str:
    """Turn a gateway failure into the message shown to the user.

    The detail is kept so a misconfigured key or quota problem is visible.
    """
    if error.detail:
        return ERROR_MESSAGE_TEMPLATE.format(detail=error.detail)
    return UNKNOWN_ERROR_MESSAGE


class SuggestionGateway(ABC):
    """Contract for anything that can answer a ``SuggestionRequest``."""

    @abstractmethod
    def invoke(self, request: SuggestionRequest) -> str:
        """Return the model's raw text, or raise ``GatewayError``."""


class OpenAIGateway(SuggestionGateway):
    """Chat Completions backed gateway."""

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL,
                 temperature: float = 0.7, max_tokens: int = 2048,
                 client: Optional[Any] = None):
        if client is None:
            if not api_key:
                raise ValueError("OpenAI API key required")
            client = OpenAI(api_key=api_key)
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def invoke(self, request: SuggestionRequest) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": compose_contents(request)},
        ]

        logger.debug(
            "Calling OpenAI ChatCompletion: model=%s mode=%s items=%d",
            self.model,
            request.mode.value,
            len(request.itinerary),
        )

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as exc:
            logger.error("Error calling OpenAI API: %s", exc)
            raise GatewayError(str(exc)) from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            logger.error("Malformed OpenAI response: %s", exc)
            raise GatewayError(f"Malformed response: {exc}") from exc

        if not content:
            raise GatewayError("Empty response from model")
        return content
