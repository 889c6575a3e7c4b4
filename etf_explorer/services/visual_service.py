from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from etf_explorer.core.config import Settings, get_settings, require_api_key
from etf_explorer.models.schemas import ImageSize

logger = logging.getLogger(__name__)


def build_visual_prompt(prompt: str) -> str:
    return f"Minimalist 3D financial visualization for: {prompt}"


def extract_image_data_uri(response: Any) -> Optional[str]:
    """Return the first inline image in ``response`` as a PNG data URI, if any."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if not inline_data or not getattr(inline_data, "data", None):
            continue
        data = inline_data.data
        if isinstance(data, (bytes, bytearray)):
            data = base64.b64encode(data).decode("ascii")
        return f"data:image/png;base64,{data}"
    return None


async def generate_etf_visual(
    prompt: str,
    size: ImageSize = ImageSize.ONE_K,
    client: Optional[genai.Client] = None,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """
    Generate an illustration for ``prompt``.

    Never raises: any failure is logged and reported as ``None``, the same as
    the model producing no image.
    """
    try:
        settings = settings or get_settings()
        client = client or genai.Client(api_key=require_api_key(settings))
        response = await client.aio.models.generate_content(
            model=settings.image_model,
            contents=build_visual_prompt(prompt),
            config=types.GenerateContentConfig(
                image_config=types.ImageConfig(
                    aspect_ratio=settings.image_aspect_ratio,
                    image_size=ImageSize(size).value,
                ),
            ),
        )
        image = extract_image_data_uri(response)
    except Exception:
        logger.exception("Image generation failed")
        return None

    if image is None:
        logger.warning("Image model returned no inline image data")
    return image
