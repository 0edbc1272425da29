import re
from typing import Optional

from sanic import Sanic
from sanic_ext import Extend

from ..config import Settings
from .logger import logger
from .routes import register_routes
from .service import ChatService
from .stores import ChatState
from .sweeper import SessionSweeper


def create_app(
    settings: Optional[Settings] = None,
    name: str = "poll-chat-server",
    state: Optional[ChatState] = None,
) -> Sanic:
    settings = settings or Settings()

    app = Sanic(name)
    app.config.CORS_ORIGINS = re.compile(r".*")
    app.config.CORS_SUPPORTS_CREDENTIALS = True
    app.config.CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
    app.config.CORS_ALLOW_HEADERS = "origin,content-type,accept,authorization"
    Extend(app)

    app.ctx.settings = settings
    app.ctx.chat_state = state or ChatState()
    app.ctx.chat_service = ChatService(app.ctx.chat_state)
    app.ctx.sweeper = SessionSweeper(
        app.ctx.chat_state,
        interval=settings.sweep_interval,
        max_idle=settings.max_idle,
    )

    register_lifecycle(app)
    register_routes(app)

    return app


def register_lifecycle(app: Sanic) -> None:
    @app.before_server_start
    async def setup(app: Sanic):
        logger.info("Server starting...")
        app.ctx.sweeper.start()

    @app.after_server_stop
    async def teardown(app: Sanic):
        logger.info("Server shutting down...")
        await app.ctx.sweeper.stop()
