#!/usr/bin/env python3
"""Populate the emoji collection from the starter emoji list, then reindex."""
import argparse
import sys
import os

# Add the parent directory to the path so we can import emojisync modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from emojisync.logging import get_logger, setup_logging
from emojisync.service import build_service
from emojisync.sync import SYNC_SUCCESS_MESSAGE

logger = get_logger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--no-reindex", action="store_true",
                        help="skip rebuilding the search index after the sync")
    args = parser.parse_args()

    service = build_service()
    logger.info(f"🚀 Syncing {len(service.seeds)} starter emojis")
    status = service.sync_all_seed_records()
    if status != SYNC_SUCCESS_MESSAGE:
        logger.error(f"❌ Sync stopped: {status}")
        return 1
    logger.info(f"✅ {status}")

    if not args.no_reindex:
        logger.info(f"✅ {service.rebuild_index()}")
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main())
