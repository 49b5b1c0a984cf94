import logging

from fastapi import FastAPI

from pebbles.api.routes import router
from pebbles.config import init_config

app = FastAPI(title="pebbles-game", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    init = init_config()
    logger.info(
        "pebbles config: difficulty=%s pebbles_count=%s max_pebbles_per_turn=%s",
        init.difficulty.value,
        init.pebbles_count,
        init.max_pebbles_per_turn,
    )


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "pebbles-game", "version": "0.1.0"}
