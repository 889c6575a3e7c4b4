from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Optional

from google import genai
from google.genai import types

from etf_explorer.core.config import Settings, get_settings, require_api_key
from etf_explorer.core.errors import MissingCredentialError
from etf_explorer.models.schemas import ChatMessage, ChatRole

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert financial analyst. "
    "Be concise and provide data-driven insights about ETFs and markets."
)

MISSING_KEY_REPLY = "API Key missing. Please check your setup."
ERROR_REPLY = "Communication error. Check your connection or API key."
EMPTY_REPLY = "No response received."

_ROLE_MAP = {ChatRole.USER: "user", ChatRole.ASSISTANT: "model"}


def build_contents(message: str, history: list[ChatMessage]) -> list[types.Content]:
    """Turn the transcript plus the new message into Gemini contents."""
    contents = [
        types.Content(role=_ROLE_MAP[item.role], parts=[types.Part(text=item.content)])
        for item in history
        if item.content
    ]
    contents.append(types.Content(role="user", parts=[types.Part(text=message)]))
    return contents


async def stream_chat_reply(
    message: str,
    history: Optional[list[ChatMessage]] = None,
    client: Optional[genai.Client] = None,
    settings: Optional[Settings] = None,
) -> AsyncGenerator[str, None]:
    """
    Stream the assistant's reply to ``message`` chunk by chunk.

    Failures are reported as a single assistant-visible chunk rather than
    raised, so the transcript always gets an answer.
    """
    settings = settings or get_settings()
    try:
        api_key = require_api_key(settings)
    except MissingCredentialError:
        logger.warning("Chat requested without an API key configured")
        yield MISSING_KEY_REPLY
        return

    client = client or genai.Client(api_key=api_key)
    had_content = False
    try:
        stream = await client.aio.models.generate_content_stream(
            model=settings.chat_model,
            contents=build_contents(message, history or []),
            config=types.GenerateContentConfig(system_instruction=SYSTEM_INSTRUCTION),
        )
        async for chunk in stream:
            text = getattr(chunk, "text", None)
            if text:
                had_content = True
                yield text
    except Exception:
        logger.exception("Chat request failed")
        yield ERROR_REPLY
        return

    if not had_content:
        yield EMPTY_REPLY
