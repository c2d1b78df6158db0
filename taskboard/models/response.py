"""
Response models for store operations
"""

from typing import Optional, List
from pydantic import BaseModel, Field


class OperationResult(BaseModel):
    """Outcome of one logical store operation (possibly many PATCH calls)"""
    action: str
    attempted: int = 0
    failed: int = 0
    skipped: bool = False
    error: Optional[str] = None
    task_ids: List[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    details: Optional[dict] = None
