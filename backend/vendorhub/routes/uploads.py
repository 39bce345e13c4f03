"""
VendorHub Backend — Uploaded Image Serving
============================================

GET /uploads/{path} streams a stored firm/product image. Path resolution and
the directory-escape check live in FileService.resolve().
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from vendorhub.schemas.common import ErrorResponse
from vendorhub.services.file_service import file_service

router = APIRouter(tags=["Uploads"])


@router.get(
    "/uploads/{file_path:path}",
    response_class=FileResponse,
    responses={
        400: {"description": "Path escapes the upload directory", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Download an uploaded image",
)
async def get_upload(file_path: str) -> FileResponse:
    return FileResponse(file_service.resolve(file_path))
