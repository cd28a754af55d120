"""Utilities for interacting with LLM providers."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from casework.core.config import Settings, settings as default_settings
from casework.core.exceptions import LLMUnavailableError

logger = logging.getLogger(__name__)


class LLMClient:
    """Coordinate interactions with primary and fallback LLM providers.

    Clients are only built for providers with credentials, and neither retries
    on its own: a failed exchange surfaces to the caller immediately.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self.settings = config or default_settings
        self.openai: Optional[AsyncOpenAI] = None
        self.claude: Optional[AsyncAnthropic] = None
        if self.settings.OPENAI_API_KEY:
            self.openai = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                timeout=self.settings.LLM_TIMEOUT_SECONDS,
                max_retries=0,
            )
        if self.settings.ANTHROPIC_API_KEY:
            self.claude = AsyncAnthropic(
                api_key=self.settings.ANTHROPIC_API_KEY,
                timeout=self.settings.LLM_TIMEOUT_SECONDS,
                max_retries=0,
            )

    async def chat(self, messages: List[Dict[str, str]], *, json_mode: bool = False) -> str:
        """Send a chat completion request with fallback to Claude."""

        if self.openai is not None:
            try:
                kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
                response = await self.openai.chat.completions.create(
                    model=self.settings.OPENAI_MODEL,
                    messages=messages,
                    max_tokens=self.settings.LLM_MAX_TOKENS,
                    **kwargs,
                )
                content = response.choices[0].message.content
                if content:
                    return content
                logger.error("OpenAI chat returned an empty completion")
            except Exception as exc:
                logger.error("OpenAI chat failed: %s", exc)

        if self.claude is not None:
            system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
            dialogue = [m for m in messages if m["role"] != "system"]
            extra = {"system": system} if system else {}
            try:
                claude_response = await self.claude.messages.create(
                    model=self.settings.CLAUDE_MODEL,
                    max_tokens=self.settings.LLM_MAX_TOKENS,
                    messages=dialogue,
                    **extra,
                )
                return claude_response.content[0].text
            except Exception as exc:
                logger.error("Claude chat failed: %s", exc)

        raise LLMUnavailableError("All LLM providers failed")
