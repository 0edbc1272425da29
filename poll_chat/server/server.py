from typing import Optional

from ..config import Settings, load_settings
from .factory import create_app
from .logger import configure_logging, logger


def run_server(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    configure_logging(settings.log_level, settings.log_file)

    app = create_app(settings)
    logger.info(f"Serving chat API on http://{settings.host}:{settings.port}/chat")
    try:
        app.run(
            host=settings.host,
            port=settings.port,
            single_process=True,
            access_log=False,
            motd=False,
        )
    except KeyboardInterrupt:
        logger.info("Shutting down...")
