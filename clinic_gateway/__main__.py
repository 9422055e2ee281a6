import logging

import uvicorn

from .config import get_settings
from .main import app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
