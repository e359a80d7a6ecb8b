"""
Sleep Tracker – Backend API
Start with: uvicorn sleep_tracker.main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sleep_tracker.config import Settings, configure_logging
from sleep_tracker.db import init_db, make_engine
from sleep_tracker.routers import tracker as tracker_router
from sleep_tracker.store import SleepStore
from sleep_tracker.tracker import SleepTrackerCoordinator

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = make_engine(settings.database_url, echo=settings.sql_echo)
        init_db(engine)
        store = SleepStore(engine)
        tracker = SleepTrackerCoordinator(store)
        await tracker.initialize()
        app.state.store = store
        app.state.tracker = tracker
        logger.info("Sleep tracker ready (%s)", settings.database_url)
        try:
            yield
        finally:
            tracker.close()
            store.close()
            engine.dispose()

    app = FastAPI(
        title="Sleep Tracker API",
        description="Track sleep nights and rate their quality",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        """Check that the API is running. Frontend can call this first."""
        return {"status": "ok", "message": "Sleep Tracker API is running"}

    @app.get("/")
    def root():
        """Root welcome."""
        return {"app": "Sleep Tracker", "docs": "/docs"}

    app.include_router(tracker_router.router)
    return app


app = create_app()
