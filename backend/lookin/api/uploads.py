import logging
import uuid
from pathlib import Path
from fastapi import APIRouter, UploadFile, File, HTTPException, Depends, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from lookin.config import get_settings
from lookin.database import get_db
from lookin.utils.security import get_current_user, get_user_from_token
from lookin.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter(prefix="/uploads", tags=["Uploads"])

ALLOWED_IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.gif', '.webp']

CHUNK_SIZE = 1024 * 1024


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user)
):
    """Upload a profile photo or listing image."""
    ext = Path(file.filename or "").suffix.lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        logger.warning(f"User {current_user.id} tried to upload '{file.filename}'")
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Only image files can be uploaded")

    max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    filename = f"{uuid.uuid4()}{ext}"
    file_path = upload_dir() / filename

    try:
        size = 0
        with file_path.open("wb") as buffer:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_size:
                    raise HTTPException(
                        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        f"File too large (max {settings.MAX_UPLOAD_SIZE_MB}MB)"
                    )
                buffer.write(chunk)
    except HTTPException:
        file_path.unlink(missing_ok=True)
        raise
    except OSError as e:
        file_path.unlink(missing_ok=True)
        logger.exception(f"Could not save upload for user {current_user.id}: {e}")
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Could not save file")

    logger.info(f"User {current_user.id} uploaded {filename} ({size} bytes)")
    return {
        "file_path": str(file_path),
        "filename": filename,
        "url": f"/api/uploads/{filename}"
    }


@router.get("/{filename}")
async def get_file(
    filename: str,
    token: str = Query(...),
    db: Session = Depends(get_db)
):
    """Serve an uploaded file."""
    if not get_user_from_token(db, token):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid token")

    # Reject anything that is not a bare file name
    if Path(filename).name != filename:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "File not found")

    file_path = upload_dir() / filename
    if not file_path.is_file():
        raise HTTPException(status.HTTP_404_NOT_FOUND, "File not found")

    return FileResponse(file_path)
