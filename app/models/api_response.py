from pydantic import BaseModel
from typing import Generic, TypeVar, Optional, Dict, Any

T = TypeVar('T')

class APIError(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None

class Meta(BaseModel):
    byte_size: Optional[int] = None
    took_ms: Optional[float] = None
    request_id: Optional[str] = None

    # decoded fields that were not part of the schema
    unknown_field_bytes: Optional[int] = None

class APIResponse(BaseModel, Generic[T]):
    status: str
    data: Optional[T] = None
    meta: Optional[Meta] = None
    error: Optional[APIError] = None

QueryResponse = APIResponse[Dict[str, Any]]
