import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from etf_explorer.core.errors import ANALYSIS_FAILED_MESSAGE, AnalysisError
from etf_explorer.models.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AnalyzeRequest,
    ChatMessage,
    ChatRequest,
    VisualRequest,
    VisualResponse,
)
from etf_explorer.services.analysis_service import POPULAR_ETFS, fetch_etf_analysis, pick_random_ticker
from etf_explorer.services.chat_service import ERROR_REPLY, stream_chat_reply
from etf_explorer.services.formatting import build_display
from etf_explorer.services.visual_service import generate_etf_visual

logger = logging.getLogger(__name__)

router = APIRouter()


def to_sse(s: str) -> str:
    # SSE: newlines in payload become separate data lines so newlines are preserved
    s = s.replace("\r", "").replace("\0", "")
    return "\n".join(f"data: {line}" for line in s.split("\n")) + "\n\n"


async def _stream_chat_chunks(message: str, history: list[ChatMessage]):
    """Yield SSE-style text chunks (data: <chunk>\n\n) for the frontend."""
    try:
        async for chunk in stream_chat_reply(message, history):
            yield to_sse(chunk)
    except Exception:
        logger.exception("Chat stream failed")
        yield to_sse(ERROR_REPLY)


@router.get("/popular")
async def popular_etfs() -> list[str]:
    return POPULAR_ETFS


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(payload: AnalyzeRequest) -> AnalysisResponse:
    request = AnalysisRequest(ticker=payload.ticker.strip() or pick_random_ticker())
    try:
        data = await fetch_etf_analysis(request.ticker)
    except AnalysisError as exc:
        # One message for the user; the kind only matters in the logs.
        logger.error("Analysis for %s failed (%s): %s", request.ticker, exc.kind, exc)
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_MESSAGE) from exc

    return AnalysisResponse(ticker=request.ticker, data=data, display=build_display(data))


@router.post("/visualize", response_model=VisualResponse)
async def visualize(payload: VisualRequest) -> VisualResponse:
    image = await generate_etf_visual(payload.prompt, payload.size)
    return VisualResponse(image=image)


@router.post("/chat")
async def chat(payload: ChatRequest) -> StreamingResponse:
    return StreamingResponse(
        _stream_chat_chunks(payload.message, payload.history),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
