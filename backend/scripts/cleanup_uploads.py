"""Remove uploaded images that no profile or listing refers to.

Usage:
    python scripts/cleanup_uploads.py            # Delete orphaned files
    python scripts/cleanup_uploads.py --dry-run  # Only list them
    python scripts/cleanup_uploads.py --min-age-hours 1  # Also remove files older than an hour
"""
import sys
import argparse
import logging
from datetime import timedelta
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lookin.config import get_settings
from lookin.database import SessionLocal
from lookin.logging_config import configure_logging
from lookin.maintenance import cleanup_uploads

logger = logging.getLogger("cleanup_uploads")


def main():
    parser = argparse.ArgumentParser(description="Delete unreferenced uploads")
    parser.add_argument("--dry-run", action="store_true", help="List files without deleting them")
    parser.add_argument("--min-age-hours", type=int, default=None,
                        help="Keep unreferenced files younger than this (default: UPLOAD_ORPHAN_MIN_AGE_HOURS)")
    args = parser.parse_args()

    configure_logging()
    settings = get_settings()

    min_age = timedelta(hours=args.min_age_hours) if args.min_age_hours is not None else None

    db = SessionLocal()
    try:
        removed = cleanup_uploads(db, Path(settings.UPLOAD_DIR), dry_run=args.dry_run, min_age=min_age)
        logger.info(f"Cleanup complete: {len(removed)} file(s)")
    finally:
        db.close()


if __name__ == "__main__":
    main()
