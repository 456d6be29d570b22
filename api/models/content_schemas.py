from pydantic import BaseModel, Field
from typing import Any, Dict


class SaveContentResponse(BaseModel):
    """Response for a successful content save."""
    success: bool = Field(default=True, description="Always true; failures return an error status")
    message: str = Field(default="Data saved successfully")
    data: Dict[str, Any] = Field(..., description="Content tree as stored after the save")


class ErrorResponse(BaseModel):
    """Error payload returned with a 500 status."""
    detail: str
