"""
NoteStore — Static Pages
=========================

Serves the bundled HTML upload form, a plain browser front end for POST /write.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"
UPLOAD_FORM = STATIC_DIR / "UploadForm.html"

router = APIRouter(tags=["Pages"])


@router.get(
    "/UploadForm.html",
    response_class=FileResponse,
    responses={200: {"description": "HTML page with the note upload form", "content": {"text/html": {}}}},
    summary="Get the note upload form",
)
async def upload_form() -> FileResponse:
    return FileResponse(UPLOAD_FORM, media_type="text/html")
