"""Main FastAPI application entry point."""

from dotenv import find_dotenv, load_dotenv

from now_playing_badge.config import get_settings
from now_playing_badge.core.app_factory import create_app
from now_playing_badge.logging_config import setup_logging

# Load environment variables from the nearest .env file
load_dotenv(find_dotenv(usecwd=True))

settings = get_settings()

# Console logging, plus JSON file logging when LOG_DIR is set
setup_logging(settings.log_level, settings.log_dir)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "now_playing_badge.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )
