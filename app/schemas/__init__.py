# app/schemas/__init__.py
"""
스키마 패키지
순환 import 방지를 위해 공통 스키마만 노출
"""

from .commons_schemas import BaseResponse, ErrorResponse

# 각 모듈별로 필요할 때 직접 import하도록 함
# from .fortune_schemas import BirthProfileRequest, FortuneResponse
# from .statistics_schemas import UsageStatisticsRequest, StatisticsResponse
