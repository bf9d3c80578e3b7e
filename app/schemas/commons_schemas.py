# app/schemas/commons_schemas.py
"""
공통 스키마 - 여러 API에서 공유하는 스키마들
"""

from pydantic import BaseModel
from typing import Any, List, Optional

# 기본 응답 스키마
class BaseResponse(BaseModel):
    status: str
    message: Optional[str] = None
    timestamp: Optional[str] = None

# 에러 응답 스키마 (None 필드는 응답에서 제외)
class ErrorResponse(BaseModel):
    error: str
    missing_fields: Optional[List[str]] = None
    details: Optional[Any] = None
    status: Optional[int] = None
