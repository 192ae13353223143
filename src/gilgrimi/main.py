"""
Gilgrimi FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (startup/shutdown)
- CORS configuration
- Error handling middleware
- Router registration

This is the production entry point for the Gilgrimi counseling bot.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gilgrimi import __version__
from gilgrimi.config import Settings, get_settings
from gilgrimi.config.logging_config import configure_logging, get_logger
from gilgrimi.infrastructure.database import DatabaseManager
from gilgrimi.infrastructure.metrics import metrics_router, update_system_info
from gilgrimi.infrastructure.monitoring import init_sentry
from gilgrimi.infrastructure.nlu import IntentClassifier, LuisIntentClassifier
from gilgrimi.infrastructure.state import (
    ConversationStateStore,
    InMemoryStateStore,
    SqlAlchemyStateStore,
)
from gilgrimi.services.bot import CounselingBot
from gilgrimi.services.dialog import RiskAssessmentDialog, RiskAssessmentSteps, StepThresholds
from gilgrimi.services.safety import CrisisResourceResolver, PriorityEscalationRule
from gilgrimi.api.v1.router import api_router
from gilgrimi.api.middleware.error_handler import ErrorHandlerMiddleware

logger = get_logger(__name__)


async def create_state_store(settings: Settings) -> ConversationStateStore:
    """Build the configured conversation state backend."""
    if settings.state_backend == "memory":
        logger.info("Using in-memory conversation state")
        return InMemoryStateStore()

    db = DatabaseManager(settings.database)
    await db.initialize()
    if settings.database.is_sqlite:
        await db.create_tables()
    logger.info("Using database conversation state")
    return SqlAlchemyStateStore(db)


def build_bot(
    settings: Settings,
    classifier: IntentClassifier,
    state_store: ConversationStateStore,
) -> CounselingBot:
    """Wire the dialog, priority rule and collaborators into a bot."""
    resources = CrisisResourceResolver(settings.crisis_resources_path)
    steps = RiskAssessmentSteps(
        thresholds=StepThresholds.from_mapping(
            settings.dialog.default_threshold,
            settings.dialog.step_thresholds,
        ),
        high_risk_cutoff=settings.dialog.high_risk_cutoff,
        resource_resolver=resources,
    )

    return CounselingBot(
        classifier=classifier,
        state_store=state_store,
        dialog=RiskAssessmentDialog(steps, max_reprompts=settings.dialog.max_reprompts),
        priority_rule=PriorityEscalationRule(
            threshold=settings.dialog.priority_danger_threshold,
            resource_resolver=resources,
        ),
        bot_id=settings.bot_id,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Builds the bot unless one was supplied to create_application().
    """
    settings: Settings = app.state.settings
    owns_bot = getattr(app.state, "bot", None) is None

    logger.info("Starting Gilgrimi application", env=settings.env, version=__version__)
    init_sentry(settings)
    update_system_info(settings.env, __version__)

    try:
        if owns_bot:
            classifier = LuisIntentClassifier(settings.luis)
            if not classifier.is_configured():
                logger.warning("LUIS not configured, every message will be re-prompted")
            state_store = await create_state_store(settings)
            app.state.bot = build_bot(settings, classifier, state_store)
            logger.info("Counseling bot initialized", state_backend=settings.state_backend)

        yield

    finally:
        logger.info("Shutting down Gilgrimi application")

        bot: Optional[CounselingBot] = getattr(app.state, "bot", None)
        if owns_bot and bot is not None:
            await bot.classifier.close()
            await bot.state_store.close()
            app.state.bot = None

        logger.info("Gilgrimi application shutdown complete")


def create_application(
    settings: Optional[Settings] = None,
    bot: Optional[CounselingBot] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Application settings (defaults to environment)
        bot: Pre-built bot, used by tests

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Gilgrimi API",
        description="Youth suicide-prevention counseling bot",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.bot = bot

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": "Gilgrimi API",
            "version": __version__,
            "status": "operational",
        }

    return app


configure_logging(get_settings())
app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gilgrimi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
