"""Housekeeping for the upload directory."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Set
from sqlalchemy.orm import Session
from lookin.config import get_settings
from lookin.models.profile import Profile
from lookin.models.room_listing import RoomListing
from lookin.models.user import User

logger = logging.getLogger(__name__)


def referenced_upload_names(db: Session) -> Set[str]:
    """File names of uploads still used by a profile, avatar or listing."""
    urls = []
    urls.extend(photo for (photo,) in db.query(Profile.profile_photo).all())
    urls.extend(avatar for (avatar,) in db.query(User.avatar_url).all())
    for (images,) in db.query(RoomListing.image_urls).all():
        urls.extend(images or [])
    # Stored values are URLs like /api/uploads/<name>; the name is the last segment
    return {url.rstrip("/").rsplit("/", 1)[-1] for url in urls if url}


def find_orphaned_uploads(
    db: Session,
    upload_dir: Path,
    min_age: Optional[timedelta] = None,
    now: Optional[datetime] = None
) -> List[Path]:
    """
    Files in the upload directory that nothing references.

    Files modified within ``min_age`` are kept: an image is uploaded before
    the profile or listing that points at it is saved.
    """
    if not upload_dir.is_dir():
        return []
    if min_age is None:
        min_age = timedelta(hours=get_settings().UPLOAD_ORPHAN_MIN_AGE_HOURS)
    cutoff = ((now or datetime.now()) - min_age).timestamp()

    used = referenced_upload_names(db)
    return sorted(
        path for path in upload_dir.iterdir()
        if path.is_file() and path.name not in used and path.stat().st_mtime < cutoff
    )


def cleanup_uploads(
    db: Session,
    upload_dir: Path,
    dry_run: bool = False,
    min_age: Optional[timedelta] = None
) -> List[Path]:
    """Delete orphaned uploads and return the paths that were (or would be) removed."""
    orphans = find_orphaned_uploads(db, upload_dir, min_age=min_age)
    logger.info(f"Found {len(orphans)} orphaned upload(s) in {upload_dir}")

    removed = []
    for path in orphans:
        if dry_run:
            logger.info(f"Would delete {path}")
            removed.append(path)
            continue
        try:
            path.unlink()
            logger.info(f"Deleted file: {path}")
            removed.append(path)
        except OSError as e:
            logger.error(f"Error deleting file {path}: {e}")
    return removed
