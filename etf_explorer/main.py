import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from etf_explorer.api.routes import router as api_router
from etf_explorer.core.config import get_settings

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="ETF Explorer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok"}


if Path("frontend").is_dir():
    app.mount(
        "/",
        StaticFiles(directory="frontend", html=True),
        name="static",
    )


@app.on_event("startup")
def _check_env_on_startup() -> None:
    # A missing key is reported per request, so only warn here.
    if not (get_settings().api_key or "").strip():
        logger.warning("No API key configured; analysis, chat and image requests will fail.")
