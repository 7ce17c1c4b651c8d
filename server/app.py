import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI

from core.abstract import App
from core.config import Settings
from server.services.aggregator import StatsAggregator
from server.services.handlers import CommandService
from server.services.pubg import PubgClient, create_http_client
from server.services.signature import SignatureVerifier
from server.services.storage import PlayerStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings
        transport: Replacement transport for the PUBG HTTP client, used by tests
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        http = create_http_client(settings, transport=transport)
        pubg_client = PubgClient(
            http, api_key=settings.pubg_api_key, default_shard=settings.pubg_default_shard
        )
        store = PlayerStore(settings.storage_path)

        app.state.store = store
        app.state.pubg_client = pubg_client
        app.state.verifier = SignatureVerifier(settings.discord_public_key)
        app.state.command_service = CommandService(
            store, pubg_client, StatsAggregator(pubg_client), settings
        )

        if not pubg_client.is_configured():
            logger.warning("PUBG_API_KEY is not set; PUBG lookups will fail")
        logger.info("PUBG Discord Bot is ready!")

        yield

        await http.aclose()

    app = FastAPI(
        title="PUBG Discord Bot",
        description="Discord interactions endpoint for PUBG player lookups",
        version="1.0.0",
        docs_url="/docs" if settings.server_debug else None,
        redoc_url="/redoc" if settings.server_debug else None,
        lifespan=lifespan,
    )

    from .api.interactions import router as interactions_router
    from .api.status import router as status_router

    app.include_router(interactions_router)
    app.include_router(status_router, prefix="/api")
    return app


class ServerApp(App):
    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.app = create_app(settings)

    def run(self) -> None:
        uvicorn.run(
            self.app,
            host=self.settings.server_bind,
            port=self.settings.server_port or 3000,
        )
