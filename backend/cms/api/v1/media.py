"""Media library endpoints backed by the S3 / MinIO asset host.

External failures come back as ``{"error": ...}`` payloads rather than
problem+json; listing never fails the request.
"""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from cms.core.dependencies import require_writable
from cms.schemas.media import ImportByUrlRequest, MediaDeleteRequest
from cms.services import storage
from cms.services.storage import MediaError, MediaValidationError

router = APIRouter()


def _error(exc: MediaError) -> JSONResponse:
    status = 400 if isinstance(exc, MediaValidationError) else 500
    return JSONResponse(status_code=status, content={"error": str(exc)})


@router.post("/upload", dependencies=[Depends(require_writable)])
async def upload_media(file: UploadFile | None = File(None)):
    """Store one image (max 10 MB) under the media folder."""
    if file is None or not file.filename:
        return JSONResponse(status_code=400, content={"error": "No file provided"})
    data = await file.read(storage.MAX_UPLOAD_SIZE + 1)
    try:
        return await run_in_threadpool(
            storage.upload_object, data, file.filename, file.content_type or ""
        )
    except MediaError as exc:
        return _error(exc)


@router.get("/list")
async def list_media():
    """Up to 100 newest images, or ``{"resources": [], "error": ...}``."""
    try:
        resources = await run_in_threadpool(storage.list_objects)
    except MediaError as exc:
        return {"resources": [], "error": str(exc)}
    return {"resources": resources}


@router.post("/delete", dependencies=[Depends(require_writable)])
async def delete_media(body: MediaDeleteRequest):
    try:
        return await run_in_threadpool(storage.delete_object, body.public_id)
    except MediaError as exc:
        return _error(exc)


@router.post("/import-by-url", dependencies=[Depends(require_writable)])
async def import_media_by_url(body: ImportByUrlRequest):
    """Download a remote image (e.g. a stock photo) into the media folder."""
    if not body.imageUrl:
        return JSONResponse(status_code=400, content={"error": "Image URL is required"})
    try:
        return await storage.import_from_url(body.imageUrl)
    except MediaError as exc:
        return _error(exc)
