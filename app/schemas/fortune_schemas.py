# app/schemas/fortune_schemas.py
"""
운세 생성 관련 스키마
"""

from enum import Enum
from pydantic import BaseModel
from typing import Optional, Union
from .commons_schemas import BaseResponse


class ContentKind(str, Enum):
    FORTUNE = "fortune"            # 오늘의 운세
    SUBCONSCIOUS = "subconscious"  # 무의식 리딩 (조력자/방해꾼)
    BALANCE = "balance"            # 시간 밸런스 (과거/현재/미래)


class BirthProfileRequest(BaseModel):
    birthdate: Optional[str] = None  # YYYYMMDD
    birthtime: Optional[str] = None  # HH:MM
    mbti: Optional[str] = None
    gender: Optional[str] = None


class DerivedFeatures(BaseModel):
    zodiac_animal: str
    star_sign: str
    time_branch: str


class ScoreSet(BaseModel):
    money: int
    love: int
    career: int
    health: int
    total: int


class ForecastResult(BaseModel):
    fortune: str
    mbti_advice: str
    scores: Optional[ScoreSet] = None


class SubconsciousResult(BaseModel):
    helper: str
    hinderer: str
    advice: str


class BalanceResult(BaseModel):
    past: str
    present: str
    future: str


class FortuneResponse(BaseResponse):
    kind: ContentKind
    features: DerivedFeatures
    result: Union[ForecastResult, SubconsciousResult, BalanceResult]
