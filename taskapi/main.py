import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from taskapi import config
from taskapi.database import Base, create_db_engine, make_session_factory
from taskapi.errors import register_error_handlers
from taskapi.logging_setup import setup_logging
from taskapi.models import task as _task_model, user as _user_model  # noqa: F401  (register tables)
from taskapi.routers import health, tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    try:
        # additive only: existing tables (e.g. from init.sql) are left alone
        Base.metadata.create_all(bind=engine)
        for route in app.routes:
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            if methods and getattr(route, "include_in_schema", False):
                logger.info("serving %-10s %s", methods, route.path)
        yield
    finally:
        engine.dispose()
        logger.info("database pool closed")


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """Build the application around one engine.

    The engine (and its pool) is owned by the app from here on: it is
    disposed when the app shuts down, including when startup fails.
    """
    setup_logging(config.LOG_LEVEL)
    if engine is None:
        engine = create_db_engine(config.DATABASE_URL)

    app = FastAPI(title="Task CRUD API", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(tasks.router)
    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("taskapi.main:app", host=config.HOST, port=config.PORT)
