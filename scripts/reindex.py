#!/usr/bin/env python3
"""Rebuild the search index over the emoji collection."""
import sys
import os

# Add the parent directory to the path so we can import emojisync modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from emojisync.exceptions import StoreOperationError
from emojisync.logging import get_logger, setup_logging
from emojisync.service import build_service

logger = get_logger(__name__)


def reindex() -> int:
    service = build_service()
    try:
        status = service.rebuild_index()
    except StoreOperationError as e:
        logger.error(f"❌ Index rebuild failed: {e.error}")
        return 1
    logger.info(f"✅ {status}")
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(reindex())
