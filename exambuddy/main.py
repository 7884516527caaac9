"""ExamBuddy - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exambuddy.core.config import get_settings
from exambuddy.core.errors import register_error_handlers
from exambuddy.core.logging import configure_logging
from exambuddy.db.base import Base
from exambuddy.db.session import engine
from exambuddy.routers import auth, diagnostics, preference, questions, stats
from exambuddy.services.llm import build_openai_client
from exambuddy.services.stats_store import InMemoryStatsStore

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready; stats store: %s", settings.stats_store)
    if settings.secret_key == "change-me-in-production-use-env":
        logger.warning("SECRET_KEY is the built-in default; set it in the environment.")
    if settings.openai_api_key:
        app.state.openai_client = build_openai_client(settings)
    else:
        app.state.openai_client = None
        logger.warning("OPENAI_API_KEY is not set. Question and tutor endpoints will fail.")

    yield
    if app.state.openai_client is not None:
        await app.state.openai_client.close()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Study-quiz API: AI questions and per-topic progress",
    lifespan=lifespan,
)

app.state.stats_store = InMemoryStatsStore() if settings.stats_store == "memory" else None

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=settings.frontend_url != "*",
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(stats.router)
app.include_router(preference.router)
app.include_router(questions.router)
app.include_router(diagnostics.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
