from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from etf_explorer.core.errors import UpstreamParseError
from etf_explorer.models.schemas import ETFData

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(json)?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"```$")


def strip_code_fence(text: str) -> str:
    """
    Remove a markdown code fence the model may have wrapped around its JSON.

    Unfenced text is only trimmed, so calling this twice is the same as once.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE.sub("", cleaned, count=1).strip()
    return cleaned


def parse_etf_payload(text: str) -> ETFData:
    """Decode model output into ETFData, or raise UpstreamParseError."""
    cleaned = strip_code_fence(text)
    try:
        payload = json.loads(cleaned)
        return ETFData.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("Could not parse AI response as ETF data: %s. Raw content: %r", exc, cleaned)
        raise UpstreamParseError(cleaned) from exc
