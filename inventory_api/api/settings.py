import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from gridfs.errors import NoFile

from inventory_api.config import settings as app_settings
from inventory_api.database import db
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.settings import BusinessSettings, SettingsUpdate
from inventory_api.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["Settings"])

ALLOWED_LOGO_TYPES = ["image/png", "image/jpeg", "image/svg+xml", "image/webp"]

@router.get("/", response_model=BusinessSettings)
async def get_settings():
    """Public: the login page shows the business name and logo."""
    return await db.settings.get_or_create()

@router.put("/", response_model=BusinessSettings)
async def update_settings(
    payload: SettingsUpdate,
    current_user: User = Depends(require_permission(Permission.CONFIGURE_SYSTEM))
):
    changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    # Nested PDF options are merged field by field
    pdf_changes = changes.pop("pdf_settings", {})
    for key, value in pdf_changes.items():
        changes[f"pdf_settings.{key}"] = value
    return await db.settings.apply(changes)

@router.post("/logo", response_model=BusinessSettings)
async def upload_logo(
    file: UploadFile = File(...),
    current_user: User = Depends(require_permission(Permission.CONFIGURE_SYSTEM))
):
    if file.content_type not in ALLOWED_LOGO_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type. Only PNG, JPEG, SVG or WEBP allowed.")

    content = await file.read()
    if len(content) > app_settings.MAX_LOGO_BYTES:
        raise HTTPException(status_code=400, detail="Logo file is too large.")

    file_id = await db.fs.upload_from_stream(
        file.filename or "logo",
        content,
        metadata={"content_type": file.content_type, "purpose": "business_logo", "uploaded_by": current_user.id}
    )
    logger.info(f"Business logo uploaded ({len(content)} bytes) by {current_user.email}")
    return await db.settings.apply({"business_logo_url": f"/api/settings/logo/{file_id}"})

@router.get("/logo/{file_id}")
async def get_logo(file_id: str):
    if not ObjectId.is_valid(file_id):
        raise HTTPException(status_code=404, detail="Logo not found")
    try:
        stream = await db.fs.open_download_stream(ObjectId(file_id))
    except NoFile:
        raise HTTPException(status_code=404, detail="Logo not found")
    content = await stream.read()
    media_type = (stream.metadata or {}).get("content_type", "application/octet-stream")
    return Response(content=content, media_type=media_type)
