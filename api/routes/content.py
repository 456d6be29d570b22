from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from api.models.content_schemas import ErrorResponse, SaveContentResponse
from services.content_service import ContentService
from utils.database import get_engine
from utils.errors import ContentReadError, ContentWriteError

router = APIRouter(
    prefix="/api",
    tags=["Content"],
)


def get_content_service() -> ContentService:
    """Content service bound to the process-wide engine."""
    return ContentService(get_engine())


@router.get("/data", responses={500: {"model": ErrorResponse}})
def get_data(service: ContentService = Depends(get_content_service)) -> Dict[str, Any]:
    """
    Return the whole site content tree.

    Every key is always present; pages and settings that were never saved
    come back in their empty default shape.
    """
    try:
        return service.get_content()
    except ContentReadError as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch content: {str(e)}"
        )


@router.post("/data", response_model=SaveContentResponse, responses={500: {"model": ErrorResponse}})
def save_data(
    content: Dict[str, Any] = Body(...),
    service: ContentService = Depends(get_content_service),
):
    """
    Save site content.

    Any top-level key may be omitted to leave that domain unchanged. A
    collection sent as an empty list is cleared. The whole save is one
    transaction; the response carries the content as stored.
    """
    try:
        data = service.save_content(content)
    except (ContentWriteError, ContentReadError) as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to save content: {str(e)}"
        )
    return SaveContentResponse(success=True, message="Data saved successfully", data=data)
