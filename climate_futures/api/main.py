"""climate-futures FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from climate_futures.api.middleware import (
    climate_futures_error_handler,
    request_logging_middleware,
    request_validation_error_handler,
)
from climate_futures.baseline import DEFAULT_BASELINE, DEFAULT_IMPACTS, BaselineData, HumanImpactSnapshot
from climate_futures.config import Config, get_config
from climate_futures.llm.adapter import CompletionClient, LLMAdapter
from climate_futures.narrative import NarrativeGenerator
from climate_futures.scenario.pipeline import ScenarioGenerator, seed_demo_scenario
from climate_futures.storage import ScenarioStore, create_store
from climate_futures.utils import ClimateFuturesError, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle handler."""
    config: Config = app.state.config
    setup_logging(config.log_level, config.log_file)

    if not getattr(app.state.completion_client, "available", True):
        logger.warning("No LLM credentials configured - scenario creation will use keyword fallbacks only")
    if config.seed_demo_scenario:
        seed_demo_scenario(app.state.store)

    logger.info("climate-futures API starting - store=%s, LLM=%s", config.store_backend, config.llm_provider)
    yield
    app.state.store.close()
    logger.info("climate-futures API shutdown - scenario store closed")


def create_app(
    config: Config | None = None,
    store: ScenarioStore | None = None,
    completion_client: CompletionClient | None = None,
    baseline: BaselineData = DEFAULT_BASELINE,
    impacts: HumanImpactSnapshot = DEFAULT_IMPACTS,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Any collaborator left as None is built from *config*.
    """
    config = config or get_config()
    if store is None:
        store = create_store(config)
    if completion_client is None:
        completion_client = LLMAdapter(config)

    app = FastAPI(
        title="climate-futures API",
        description="Baseline climate data, speculative AI scenarios and constrained forecast curves",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.store = store
    app.state.completion_client = completion_client
    app.state.baseline = baseline
    app.state.impacts = impacts
    app.state.scenario_generator = ScenarioGenerator(
        completion_client,
        store,
        baseline=baseline,
        impacts=impacts,
        max_tokens=config.scenario_max_tokens,
        temperature=config.scenario_temperature,
    )
    app.state.narrative_generator = NarrativeGenerator(
        completion_client,
        qa_max_tokens=config.qa_max_tokens,
        bulletin_max_tokens=config.bulletin_max_tokens,
        temperature=config.narrative_temperature,
    )

    # CORS - restricted to configured origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Request logging and X-Request-ID middleware
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_logging_middleware)

    app.add_exception_handler(ClimateFuturesError, climate_futures_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Import and include routers
    from climate_futures.api.routes.health import router as health_router
    from climate_futures.api.routes.baseline import router as baseline_router
    from climate_futures.api.routes.scenarios import router as scenarios_router
    from climate_futures.api.routes.narrative import router as narrative_router

    app.include_router(health_router)
    app.include_router(baseline_router)
    app.include_router(scenarios_router)
    app.include_router(narrative_router)

    return app
