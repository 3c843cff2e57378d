from pydantic import BaseModel, Field
from typing import Generic, TypeVar, Optional, Any, Dict

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Envelope for every successful daily-redeem response."""
    message: str = Field(..., description="Short outcome message, e.g. 'Redeem status fetched successfully'.")
    data: Optional[DataType] = Field(None, description="Redeem status, batch or snapshot payload.")

class ErrorDetail(BaseModel):
    code: str = Field(..., description="Stable error code: VALIDATION_ERROR, NOT_FOUND, STORE_UNAVAILABLE, ...")
    message: str = Field(..., description="Message safe to show to the student")
    details: Optional[Dict[str, Any]] = Field(None, description="Validation errors or the failing exception type")

class ErrorResponse(BaseModel):
    error: ErrorDetail
    timestamp: str = Field(..., description="ISO 8601 UTC timestamp of the failure")
    path: str
    request_id: Optional[str] = Field(None, description="Matches the X-Request-ID response header")
