from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import PlainTextResponse

from jobbersync.api.deps import get_integrations
from jobbersync.api.middleware import RequestLogMiddleware
from jobbersync.api.routes.oauth import router as oauth_router
from jobbersync.api.routes.webhooks import router as webhooks_router
from jobbersync.common.logging import get_logger, setup_logging
from jobbersync.config import settings
from jobbersync.integrations.base import BaseIntegration

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if not settings.TRELLO_BOARD_ID:
        logger.warning("TRELLO_BOARD_ID is not set; webhooks will not match any card")
    yield


app = FastAPI(
    title="Jobber-Trello Sync",
    description="Relays Jobber events onto matching Trello cards",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLogMiddleware)

app.include_router(webhooks_router)
app.include_router(oauth_router)


@app.get("/", response_class=PlainTextResponse)
async def index():
    return "Jobber-Trello Sync Server is running! Use /test to test the integration."


@app.get("/health", response_class=PlainTextResponse)
async def health_check():
    return "Server is running!"


@app.get("/health/integrations")
async def integrations_health(integrations: list[BaseIntegration] = Depends(get_integrations)):
    checks = {integration.name: await integration.health_check() for integration in integrations}
    return {"status": "healthy" if all(checks.values()) else "degraded", "integrations": checks}


def run() -> None:
    uvicorn.run(
        "jobbersync.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
