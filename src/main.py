import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.config.logging_config import configure_logging
from src.config.settings import settings
from src.modules.announcement.router import router as announcement_router
from src.modules.renderer.browser import browser_pool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    logger.info("Announcement feed service starting")
    yield
    await browser_pool.close()
    logger.info("Announcement feed service stopped")


app = FastAPI(title="Announcement Feed", lifespan=lifespan)

app.include_router(
    announcement_router, prefix="/binance/announcement", tags=["announcement"]
)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.app_host, port=settings.app_port)
