"""
Entry point: ``python -m resource_service``.
"""
import logging

import uvicorn

from resource_service.utils.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    logger.info("Starting resource service on %s:%s", settings.host, settings.port)
    logger.info("Health check: http://localhost:%s/health", settings.port)
    logger.info("API endpoints: http://localhost:%s/api/resources", settings.port)
    uvicorn.run("resource_service.app:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
