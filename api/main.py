from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, http, log, metrics, settings
from core.migrate import apply_schema
from miniatures import router as miniatures_router
from portfolio import router as portfolio_router
from storage import router as storage_router

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if settings.auto_migrate():
            await apply_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="portfolio admin api", lifespan=lifespan)

# Allow the admin frontend to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

http.install_error_handlers(app)
http.install_request_logging(app)
metrics.install_metrics(app)

app.include_router(portfolio_router.router, prefix=f"{API_PREFIX}/portfolio", tags=["portfolio"])
app.include_router(miniatures_router.router, prefix=f"{API_PREFIX}/miniatures", tags=["miniatures"])
app.include_router(storage_router.router, prefix=API_PREFIX, tags=["files"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
