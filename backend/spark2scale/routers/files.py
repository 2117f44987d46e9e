import mimetypes

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from spark2scale.services.document_service import get_document_full_path

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{stored_path:path}")
async def download_file(stored_path: str):
    full_path = get_document_full_path(stored_path)
    if full_path is None or not full_path.is_file():
        raise HTTPException(status_code=404, detail="File not found")

    media_type, _ = mimetypes.guess_type(full_path.name)
    return FileResponse(
        path=str(full_path),
        filename=full_path.name,
        media_type=media_type or "application/octet-stream",
    )
