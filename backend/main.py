"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import settings
from backend.database import build_engine, create_db_and_tables
from backend.services.insights import GeminiTextGenerator, InsightNarrator
from backend.utils.logging import setup_logging
from backend.api import auth, trades, dashboard, insights, system


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    engine = build_engine(settings.database_url)
    create_db_and_tables(engine)
    app.state.engine = engine
    app.state.narrator = InsightNarrator(
        GeminiTextGenerator(api_key=settings.gemini_api_key, model=settings.insight_model),
        timeout_seconds=settings.insight_timeout_seconds,
    )

    yield

    engine.dispose()


app = FastAPI(
    title="Trade Journal",
    description="Personal trading journal with performance analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(auth.router)
app.include_router(trades.router)
app.include_router(dashboard.router)
app.include_router(insights.router)
app.include_router(system.router)
