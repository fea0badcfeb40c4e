import logging

import uvicorn

from app.core.config import get_settings

settings = get_settings()

# Configure logging before the app import so seed loading is logged.
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from app.main import app  # noqa: E402

logger.info("api/index.py initialized")

# Entry point for serverless hosts; they import the FastAPI ``app`` from here.


def main() -> None:
    logger.info("Server running at http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
