"""FastAPI application initialization."""

from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration

from webreader.api import extract, health
from webreader.config import get_settings
from webreader.constants import SERVICE_NAME, SERVICE_VERSION
from webreader.logging_config import setup_logfire
from webreader.middleware.correlation_id import CorrelationIDMiddleware
from webreader.services.genai_client import create_genai_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: observability setup and the shared Gemini client."""
    settings = get_settings()

    setup_logfire(app)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            environment=settings.env,
            integrations=[FastApiIntegration()],
        )

    # One client for the whole process, handed to requests via get_genai_client
    app.state.genai_client = create_genai_client(settings)

    logfire.info(
        "Application startup complete",
        model=settings.gemini_model,
        environment=settings.env,
        max_extract_chars=settings.max_extract_chars,
        gemini_configured=app.state.genai_client is not None,
    )

    yield

    app.state.genai_client = None
    logfire.info("Application shutdown complete")


app = FastAPI(
    title=SERVICE_NAME,
    description="Answers questions about the contents of a web page using Gemini",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(CorrelationIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["health"])
app.include_router(extract.router, prefix="/api", tags=["extract"])


@app.get("/")
def root():
    """Root endpoint."""
    settings = get_settings()
    return {
        "message": SERVICE_NAME,
        "model": settings.gemini_model,
        "version": SERVICE_VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "webreader.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.env == "local",
    )
