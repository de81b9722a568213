"""Main entry point for the Medical Diagnostic Interface API."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from diagnostic.api import create_fastapi_app
from diagnostic.logging_config import get_logger, setup_logging


def main():
    """Load .env, configure logging and serve the API."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")
    setup_logging()
    logger = get_logger("diagnostic.main")

    host = os.getenv("API_HOST", "localhost")
    port = int(os.getenv("API_PORT", "8000"))
    logger.info("Serving diagnostic API on %s:%d", host, port)

    # Keep the handlers installed by setup_logging()
    uvicorn.run(create_fastapi_app(), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
