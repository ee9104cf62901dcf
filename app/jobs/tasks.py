"""
Background tasks run by the gateway job server.
"""
import logging
import time
from pathlib import Path

from celery import shared_task

from jobs.celery_app import PING, PURGE_EXPIRED_FILES

logger = logging.getLogger(__name__)


@shared_task(name=PURGE_EXPIRED_FILES)
def purge_expired_files(directory: str, max_age_days: int) -> dict:
    """Delete stored files not modified within the retention window."""
    root = Path(directory)
    if not root.is_dir():
        logger.info(f"Nothing to purge, {directory} does not exist")
        return {"scanned": 0, "deleted": 0}

    cutoff = time.time() - max_age_days * 86400
    scanned = deleted = 0
    for path in root.iterdir():
        if not path.is_file() or path.name.startswith("."):
            continue
        scanned += 1
        if path.stat().st_mtime < cutoff:
            path.unlink()
            deleted += 1

    logger.info(f"Purged {deleted} of {scanned} files older than {max_age_days} days from {directory}")
    return {"scanned": scanned, "deleted": deleted}


@shared_task(name=PING)
def ping() -> str:
    return "pong"
