from pydantic import BaseModel
from typing import Optional

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str
    timestamp: str

class SplitInfoResponse(BaseModel):
    upstream_url: str
    timeout: Optional[float] = None
    propagate_error_status: bool = False
