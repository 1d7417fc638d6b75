import logging

import uvicorn

from .api import create_app
from .settings import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the gateway server."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(
        "Starting drivegate on %s:%s (credentials: %s)",
        settings.host,
        settings.port,
        settings.credentials_path,
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
