import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rims.api import boms, item_templates, items, reports
from rims.bootstrap import initialize_app_data
from rims.config import settings
from rims.database import Database
from rims.storage import FileStore

logger = logging.getLogger(__name__)


def create_app(db: Database | None = None, seed: bool | None = None) -> FastAPI:
    """Build the API. Tests pass their own ``db`` backed by a MemoryStore."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(
            level=settings.LOG_LEVEL.upper(),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        database = db or Database(FileStore(settings.STORAGE_DIR))
        app.state.db = database
        app.state.repos = await initialize_app_data(database, seed=seed)
        yield
        database.close()

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Inventory items, stock and cost ledgers, bills of materials and reporting",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error: %s\n%s", exc, traceback.format_exc())
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    app.include_router(items.router, prefix="/api/v1")
    app.include_router(boms.router, prefix="/api/v1")
    app.include_router(item_templates.router, prefix="/api/v1")
    app.include_router(reports.router, prefix="/api/v1")

    @app.get("/health")
    def health(request: Request):
        return {"status": "ok", "database": request.app.state.db.is_initialized}

    return app


app = create_app()
