# app/api/statistics.py
"""
사용 통계 API (저장/조회/초기화/CSV 내보내기/이탈 기록)
"""

from datetime import date, datetime

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from app.schemas.statistics_schemas import (
    DropoutRequest,
    StatisticsResetResponse,
    StatisticsResponse,
    StatisticsSaveResponse,
    UsageStatisticsRequest,
)
from app.services import statistics_service as stats_module
from app.services.database_service import now_kst
from app.utils.exceptions import FortuneServiceError, InputValidationError
from app.utils.logger import logger

router = APIRouter(tags=["statistics"])

REQUIRED_USAGE_FIELDS = ("gender", "birthDate", "timeSlot", "weekday", "selectedService")


def _parse_birth_date(value: str) -> date:
    value = value.strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise InputValidationError("birthDate는 YYYY-MM-DD 또는 YYYYMMDD 형식이어야 합니다.")


@router.post("/statistics", response_model=StatisticsSaveResponse)
async def save_statistics(request: UsageStatisticsRequest):
    """서비스 이용 기록 저장"""
    try:
        missing = [
            field for field in REQUIRED_USAGE_FIELDS
            if not (getattr(request, field) or "").strip()
        ]
        if missing:
            raise InputValidationError("필수 필드가 누락되었습니다.", missing_fields=missing)

        record_id = await stats_module.statistics_service.save_usage(
            gender=request.gender,
            birth_date=_parse_birth_date(request.birthDate),
            time_slot=request.timeSlot,
            weekday=request.weekday,
            selected_service=request.selectedService,
            mbti=request.mbti,
        )

        return StatisticsSaveResponse(
            status="success",
            message="통계 데이터가 저장되었습니다.",
            record_id=record_id
        )

    except FortuneServiceError:
        raise
    except Exception as e:
        logger.error(f" 통계 저장 오류: {e}")
        raise HTTPException(status_code=500, detail="통계 저장 중 오류가 발생했습니다.")


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics():
    try:
        return await stats_module.statistics_service.get_statistics()

    except FortuneServiceError:
        raise
    except Exception as e:
        logger.error(f" 통계 조회 오류: {e}")
        raise HTTPException(status_code=500, detail="통계 조회 중 오류가 발생했습니다.")


@router.delete("/statistics", response_model=StatisticsResetResponse)
async def reset_statistics():
    try:
        deleted_count = await stats_module.statistics_service.reset_statistics()
        logger.info(f"🗑️ 통계 초기화: {deleted_count}건 삭제")

        return StatisticsResetResponse(
            status="success",
            message="모든 통계 데이터가 삭제되었습니다.",
            deleted_count=deleted_count
        )

    except FortuneServiceError:
        raise
    except Exception as e:
        logger.error(f" 통계 초기화 오류: {e}")
        raise HTTPException(status_code=500, detail="통계 초기화 중 오류가 발생했습니다.")


@router.get("/statistics/export")
async def export_statistics():
    try:
        csv_text = await stats_module.statistics_service.export_statistics()
        filename = f"statistics_{now_kst().date().isoformat()}.csv"

        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'}
        )

    except FortuneServiceError:
        raise
    except Exception as e:
        logger.error(f" CSV 내보내기 오류: {e}")
        raise HTTPException(status_code=500, detail="CSV 내보내기 중 오류가 발생했습니다.")


@router.post("/statistics/dropout", response_model=StatisticsSaveResponse)
async def report_dropout(request: DropoutRequest):
    """OCR 단계에서 이탈한 사용자 기록"""
    try:
        if not (request.reason or "").strip():
            raise InputValidationError("필수 필드가 누락되었습니다.", missing_fields=["reason"])

        record_id = await stats_module.statistics_service.report_dropout(request.reason.strip())

        return StatisticsSaveResponse(
            status="success",
            message="이탈 기록이 저장되었습니다.",
            record_id=record_id
        )

    except FortuneServiceError:
        raise
    except Exception as e:
        logger.error(f" 이탈 기록 저장 오류: {e}")
        raise HTTPException(status_code=500, detail="이탈 기록 저장 중 오류가 발생했습니다.")
