from typing import Optional
from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: str

class ErrorResponse(BaseModel):
    error: str
    success: Optional[bool] = None
