from __future__ import annotations

import logging
import random
from typing import Optional

from google import genai
from google.genai import types

from etf_explorer.core.config import Settings, get_settings, require_api_key
from etf_explorer.core.errors import EmptyUpstreamResponseError, InvalidTickerError, UpstreamTransportError
from etf_explorer.models.schemas import AnalysisMode, ETFData
from etf_explorer.services.normalize import parse_etf_payload

logger = logging.getLogger(__name__)

POPULAR_ETFS = [
    "VOO", "QQQ", "SCHD", "VTI", "JEPI", "ARKK", "SPY", "IWM", "VEA", "VWO",
    "XLK", "XLF", "DIA", "SMH", "TLT", "GLD", "VT", "VXUS", "VIG", "BND",
]

_JSON_SHAPE = """{
  "ticker": string,
  "summary": string,
  "sector": string,
  "currentPrice": string,
  "performance": { "ytd": string, "threeMonth": string, "sixMonth": string, "oneYear": string },
  "holdings": [{ "name": string, "percentage": string }],
  "alternatives": [{ "ticker": string, "price": string }]
}"""


def pick_random_ticker() -> str:
    return random.choice(POPULAR_ETFS)


def _get_genai_client(settings: Settings) -> genai.Client:
    return genai.Client(api_key=require_api_key(settings))


def build_grounded_prompt(ticker: str) -> str:
    return (
        f"Analyze the ETF ticker: {ticker}.\n"
        "Use Google Search to find current price, top 5 holdings, and returns (YTD, 3m, 6m, 1y).\n"
        "Also suggest 4 comparable ETFs as alternatives with their current prices.\n\n"
        "Return ONLY a raw JSON object (no markdown, no code blocks) matching this structure:\n"
        f"{_JSON_SHAPE}"
    )


def build_schema_prompt(ticker: str) -> str:
    return (
        f"Provide a financial analysis for the ETF ticker {ticker}: a short summary, its sector, "
        "current price, returns (YTD, 3 month, 6 month, 1 year) as signed percentages, "
        "its top 5 holdings with weights, and 4 comparable ETFs as alternatives with their prices."
    )


def _string(description: str) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


def etf_response_schema() -> types.Schema:
    """Output schema mirroring ETFData's wire shape."""
    performance_fields = ["ytd", "threeMonth", "sixMonth", "oneYear"]
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "ticker": _string("ETF ticker symbol."),
            "summary": _string("One paragraph description of the fund."),
            "sector": _string("Sector or asset class label."),
            "currentPrice": _string("Current price with currency symbol, e.g. $512.30."),
            "performance": types.Schema(
                type=types.Type.OBJECT,
                properties={name: _string("Signed percentage, e.g. +4.2%.") for name in performance_fields},
                required=performance_fields,
            ),
            "holdings": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "name": _string("Holding name."),
                        "percentage": _string("Portfolio weight, e.g. 7.1%."),
                    },
                    required=["name", "percentage"],
                ),
            ),
            "alternatives": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "ticker": _string("Alternative ETF ticker."),
                        "price": _string("Current price, e.g. $101.20."),
                    },
                    required=["ticker", "price"],
                ),
            ),
        },
        required=[
            "ticker",
            "summary",
            "sector",
            "currentPrice",
            "performance",
            "holdings",
            "alternatives",
        ],
    )


def _request_for(
    ticker: str, mode: AnalysisMode, settings: Settings
) -> tuple[str, str, types.GenerateContentConfig]:
    if mode is AnalysisMode.SCHEMA:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=etf_response_schema(),
        )
        return settings.schema_model, build_schema_prompt(ticker), config

    # Search tooling cannot be combined with a JSON response schema, so the
    # grounded prompt asks for raw JSON in prose instead.
    config = types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
    )
    return settings.analysis_model, build_grounded_prompt(ticker), config


async def fetch_etf_analysis(
    ticker: str,
    client: Optional[genai.Client] = None,
    settings: Optional[Settings] = None,
    mode: Optional[AnalysisMode] = None,
) -> ETFData:
    """
    Ask the model for an analysis of ``ticker`` and return it as ETFData.

    The ticker is sent as given. Raises a subclass of AnalysisError on any
    failure; nothing is retried.
    """
    settings = settings or get_settings()
    require_api_key(settings)
    if not ticker or not ticker.strip():
        raise InvalidTickerError()
    client = client or _get_genai_client(settings)
    mode = mode or settings.analysis_mode

    model, prompt, config = _request_for(ticker, mode, settings)
    logger.info("Requesting %s analysis for %s from %s", mode.value, ticker, model)

    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
    except Exception as exc:
        logger.exception("ETF analysis request for %s failed", ticker)
        raise UpstreamTransportError(f"AI service request failed: {exc}") from exc

    text = getattr(response, "text", None)
    if not text:
        logger.error("ETF analysis for %s returned no text", ticker)
        raise EmptyUpstreamResponseError()

    return parse_etf_payload(text)
