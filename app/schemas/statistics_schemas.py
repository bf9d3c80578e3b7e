# app/schemas/statistics_schemas.py
"""
사용 통계 / 이탈 기록 관련 스키마
"""

from pydantic import BaseModel
from typing import Dict, Optional
from .commons_schemas import BaseResponse


class UsageStatisticsRequest(BaseModel):
    # 누락 필드를 직접 모아 알려주기 위해 전부 Optional로 받는다
    gender: Optional[str] = None
    birthDate: Optional[str] = None  # YYYY-MM-DD 또는 YYYYMMDD
    timeSlot: Optional[str] = None
    weekday: Optional[str] = None
    mbti: Optional[str] = None
    selectedService: Optional[str] = None


class DropoutRequest(BaseModel):
    reason: Optional[str] = None


class StatisticsResponse(BaseModel):
    total_users: int
    gender_stats: Dict[str, int]
    age_stats: Dict[str, int]
    mbti_stats: Dict[str, int]
    service_stats: Dict[str, int]
    time_stats: Dict[str, int]
    weekday_stats: Dict[str, int]
    dropout_rate: Optional[int] = None
    dropout_count: Optional[int] = None


class StatisticsSaveResponse(BaseResponse):
    record_id: Optional[str] = None


class StatisticsResetResponse(BaseResponse):
    deleted_count: int
