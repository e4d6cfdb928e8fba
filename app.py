"""
Entry point for running the StoryVote API with uvicorn.

    python app.py

Host, port and auto-reload come from the HOST, PORT and RELOAD environment
variables (see storyvote.utils.config).
"""

from dotenv import load_dotenv

# Load environment variables before the settings are read
load_dotenv()

from storyvote.utils.config import get_settings
from storyvote.utils.logger import setup_logging
from storyvote.main import app  # noqa: F401  (re-exported for "uvicorn app:app")

logger = setup_logging()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting StoryVote on {settings.HOST}:{settings.PORT} (reload={settings.RELOAD})")

    uvicorn.run(
        "app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
