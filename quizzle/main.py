"""Main FastAPI application for QuizzleQuest."""
import random
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.exc import SQLAlchemyError
from quizzle.routers import progress, puzzle, quiz
from quizzle.db.init_db import init_db
from quizzle.db.store import KeyValueStore
from quizzle.logging_config import setup_logging, get_logger
from quizzle.services.notifications import ReminderNotifier, log_delivery
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.puzzle_session import PuzzleController
from quizzle.services.quiz_service import QuizService
from quizzle.services.quiz_session import QuizController
from quizzle.services.scheduler import AsyncioScheduler
from quizzle.config import settings

# Set up logging on module import
log_level = settings.LOG_LEVEL if settings.LOG_LEVEL else None
setup_logging(log_level)
logger = get_logger(__name__)


def create_app(
    store: Optional[KeyValueStore] = None,
    scheduler=None,
    clock: Callable[[], datetime] = datetime.now,
    rng: Optional[random.Random] = None,
    notifier: Optional[ReminderNotifier] = None
) -> FastAPI:
    """Build the application.

    Providers and controllers are created in the lifespan, after the database
    is ready, and kept on ``app.state`` for the request dependencies.

    Args:
        store: Key-value store. Defaults to the configured database, which is
            initialized on startup.
        scheduler: Session timer source. Defaults to the running event loop.
        clock: Wall-clock for streaks, results and the daily challenge
        rng: Random source shared by recommendations, challenges and shuffles
        notifier: Reminder scheduler. Defaults to one honouring NOTIFICATIONS_ENABLED.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup initiated")
        kv_store = store
        if kv_store is None:
            try:
                init_db()
                logger.info("Database initialization completed successfully")
            except Exception as e:
                logger.error(f"Database initialization failed: {e}", exc_info=True)
                raise
            kv_store = KeyValueStore()

        shared_rng = rng or random.Random()
        timer = scheduler or AsyncioScheduler()
        app.state.store = kv_store
        # No push channel in this service: reminders are logged, not delivered.
        app.state.notifier = notifier or ReminderNotifier(
            enabled=settings.NOTIFICATIONS_ENABLED, deliver=log_delivery
        )
        app.state.puzzle_service = PuzzleService(kv_store, clock=clock, rng=shared_rng)
        app.state.quiz_service = QuizService(
            kv_store, app.state.puzzle_service, clock=clock, rng=shared_rng, notifier=app.state.notifier
        )
        app.state.quiz_controller = QuizController(app.state.quiz_service, timer, clock)
        app.state.puzzle_controller = PuzzleController(app.state.puzzle_service, timer, clock, shared_rng)

        yield

        app.state.quiz_controller.reset()
        app.state.puzzle_controller.reset()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="QuizzleQuest API",
        description="""
        Timed quizzes and puzzles with local progress tracking.

        ## Quiz Flow

        1. **Pick a quiz**: GET `/api/quizzes` or `/api/quizzes/recommended`
        2. **Start**: POST `/api/quiz/session/start`
        3. **Answer**: POST `/api/quiz/session/select` then `/api/quiz/session/submit`;
           the answer is revealed and the next question follows automatically
        4. **Finish**: the result is folded into `/api/progress` when the last
           question is answered or the countdown reaches zero

        ## Puzzle Flow

        Start with POST `/api/puzzle/session/start`, answer with
        `/api/puzzle/session/answer` (or the letter endpoints for word
        scrambles), and submit. Hints are revealed one at a time.
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_tags=[
            {"name": "quiz", "description": "Quiz catalog and quiz sessions"},
            {"name": "puzzle", "description": "Puzzle catalog and puzzle sessions"},
            {"name": "progress", "description": "Progress, daily challenge and settings"},
            {"name": "health", "description": "Service health checks"},
        ]
    )

    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.RATE_LIMIT])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    logger.info(f"Rate limiting enabled: default {settings.RATE_LIMIT} per IP")

    app.include_router(quiz.router)
    app.include_router(puzzle.router)
    app.include_router(progress.router)

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Health check with a database round trip.

        Returns:
            200 OK: Service is healthy and the store is reachable
            503 Service Unavailable: Database query failed
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            request.app.state.store.ping()
            logger.debug("Health check passed")
            return {
                "status": "healthy",
                "database": "connected",
                "timestamp": timestamp,
                "environment": settings.ENVIRONMENT
            }
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}", exc_info=True)
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "error": str(e),
                    "timestamp": timestamp
                }
            )

    return app


app = create_app()
