"""
DevBlog - FastAPI Backend

Owns the process-wide handles: the asyncpg pool (record store) and the
Elasticsearch client (search index). Both are opened in the lifespan and
released on shutdown; request handlers get them through app.state.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devblog.api import posts
from devblog.config import Settings, create_postgres_pool, create_search_client, get_settings
from devblog.repositories.schema import initialize_schema
from devblog.services.index_sync import IndexSync

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )


def create_app(settings: Optional[Settings] = None, manage_connections: bool = True) -> FastAPI:
    """
    Build the application.

    With manage_connections=False the caller is responsible for setting
    app.state.db_pool and app.state.index_sync (tests do this).
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not manage_connections:
            yield
            return

        db_pool = await create_postgres_pool(settings)
        search_client = await create_search_client(settings)
        try:
            await initialize_schema(db_pool)
            index_sync = IndexSync(search_client, index_name=settings.search_index_name)
            await index_sync.ensure_index()

            app.state.db_pool = db_pool
            app.state.index_sync = index_sync
            logger.info("DevBlog ready")
            yield
        finally:
            await search_client.close()
            await db_pool.close()
            logger.info("DevBlog connections closed")

    app = FastAPI(
        title="DevBlog",
        description="Post authoring with search index synchronization",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(posts.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
