"""
Artwork upload
Stores customer artwork in R2 when configured, otherwise on local disk
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..config import (
    APP_BASE_URL,
    R2_ACCESS_KEY_ID,
    R2_ACCOUNT_ID,
    R2_BUCKET_NAME,
    R2_PUBLIC_URL,
    R2_SECRET_ACCESS_KEY,
    UPLOAD_DIR,
)
from ..database import get_db
from ..models import User
from ..models_work import WorkOrderItem, WorkOrderItemArtwork

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Upload"])

# Either the declared type or the extension admits a file
ALLOWED_FILE_TYPES = ["image/png", "image/jpeg", "application/pdf", "image/vnd.adobe.photoshop"]
ALLOWED_EXTENSIONS = [".png", ".jpg", ".jpeg", ".pdf", ".psd"]


def r2_configured() -> bool:
    return bool(R2_ACCOUNT_ID and R2_ACCESS_KEY_ID and R2_SECRET_ACCESS_KEY)


def get_r2_client():
    """Create and return an R2 client."""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
        aws_access_key_id=R2_ACCESS_KEY_ID,
        aws_secret_access_key=R2_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def file_extension(filename: Optional[str]) -> str:
    return os.path.splitext(filename or "")[1].lower()


def is_allowed(content_type: Optional[str], filename: Optional[str]) -> bool:
    return content_type in ALLOWED_FILE_TYPES or file_extension(filename) in ALLOWED_EXTENSIONS


def store_file(key: str, contents: bytes, content_type: Optional[str]) -> str:
    """Write the file and return the URL it is served from"""
    if r2_configured():
        get_r2_client().put_object(
            Bucket=R2_BUCKET_NAME,
            Key=key,
            Body=contents,
            ContentType=content_type or "application/octet-stream",
        )
        base = R2_PUBLIC_URL or f"https://{R2_ACCOUNT_ID}.r2.cloudflarestorage.com/{R2_BUCKET_NAME}"
        return f"{base.rstrip('/')}/{key}"

    upload_dir = Path(UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / key).write_bytes(contents)
    return f"{APP_BASE_URL}/uploads/{key}"


@router.post("")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    workOrderItemId: Optional[int] = Form(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Upload an artwork file, optionally attaching it to a work order item"""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    if not is_allowed(file.content_type, file.filename):
        logger.warning(f"❌ Rejected upload '{file.filename}' ({file.content_type})")
        raise HTTPException(status_code=400, detail="Invalid file type")

    item = None
    if workOrderItemId is not None:
        item = db.query(WorkOrderItem).filter(WorkOrderItem.id == workOrderItemId).first()
        if not item:
            raise HTTPException(status_code=404, detail="Work order item not found")

    contents = await file.read()
    key = f"{int(time.time() * 1000)}{file_extension(file.filename)}"
    logger.info(f"📤 Uploading '{file.filename}' as {key}")

    try:
        file_url = store_file(key, contents, file.content_type)
    except (BotoCoreError, ClientError, OSError) as e:
        logger.error(f"❌ Upload failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Error saving file") from e

    if item is not None:
        db.add(
            WorkOrderItemArtwork(
                work_order_item_id=item.id, file_url=file_url, description=file.filename
            )
        )
        db.commit()
        logger.info(f"✅ Artwork {key} attached to work order item {item.id}")

    return {"success": True, "fileUrl": file_url, "message": "File uploaded successfully"}
