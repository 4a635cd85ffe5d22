#!/usr/bin/env python3
"""Startup script for the emojisync API server."""

import sys
import uvicorn
from pathlib import Path

# Add the parent directory to the path
sys.path.append(str(Path(__file__).parent.parent))

from emojisync.config import settings
from emojisync.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    """Start the API server."""
    setup_logging()
    logger.info("🚀 Starting emojisync server...")

    if not settings.OPENAI_API_KEY:
        logger.warning("⚠️  OPENAI_API_KEY not set - generation endpoints will return 503")

    logger.info(f"📊 Server Configuration:")
    logger.info(f"  Host: {settings.API_HOST}")
    logger.info(f"  Port: {settings.API_PORT}")
    logger.info(f"  Log Level: {settings.LOG_LEVEL}")
    logger.info(f"  Collection: {settings.COLLECTION_NAME} / {settings.SEARCH_METHOD}")
    logger.info(f"  Records DB: {settings.RECORDS_DB_PATH}")
    logger.info(f"  ChromaDB Path: {settings.CHROMADB_PATH or 'in-memory'}")

    uvicorn.run(
        "emojisync.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
        reload=False
    )


if __name__ == "__main__":
    main()
