"""
App entrypoint.

- Loads the question set once, before the listener accepts connections
- Serves the views and cards from routers.py
- Serves public assets (logo) under /public
"""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

import routers
from config import Settings, settings as default_settings
from dataset import QuestionStore, load_question_store

logger = logging.getLogger(__name__)


def create_app(store: Optional[QuestionStore] = None, settings: Settings = default_settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            app.state.store = load_question_store(settings.dataset_path)
        yield

    app = FastAPI(
        title="Quiz Cards",
        version=settings.version,
        description="Quiz questions as web pages, printable PDF cards and answer QR codes",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(settings.templates_dir))

    app.include_router(routers.router)
    app.mount(settings.public_prefix, StaticFiles(directory=settings.public_dir), name="public")
    return app


app = create_app()


def run(settings: Settings = default_settings) -> None:
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting %s on port %d", settings.service_name, settings.port)
    try:
        uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port,
                    log_level=settings.log_level.lower())
    except (OSError, SystemExit) as e:
        logger.error("Server failed to start: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
