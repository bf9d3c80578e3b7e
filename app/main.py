# app/main.py
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api import fortune, statistics, ocr
from app.services.scheduler_service import scheduler_service
from app.services.database_service import database_service
from app.schemas.commons_schemas import ErrorResponse
from app.utils.exceptions import FortuneServiceError, InputValidationError, UpstreamError
from app.utils.logger import setup_logger
from app.config import settings
import uvicorn

# 로거 설정
logger = setup_logger()

app = FastAPI(
    title="Fortune Statistics Service",
    description="띠/별자리/시진 기반 AI 운세 생성 + 이용 통계 + CLOVA OCR 프록시",
    version="1.0.0",
    debug=settings.debug
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    """앱 시작시 초기화"""
    logger.info(" Fortune Statistics Service 시작")
    logger.info(f" Debug 모드: {settings.debug}")

    # 데이터베이스 테이블 생성 (필요시)
    try:
        await database_service.create_tables()
        logger.info("🗄️ 데이터베이스 초기화 완료")
    except Exception as e:
        logger.warning(f" 데이터베이스 초기화 실패: {e}")

    # 스케줄러 시작 (이탈 기록 정리)
    scheduler_service.start()
    logger.info(" 스케줄러 시작 완료")

@app.on_event("shutdown")
async def shutdown_event():
    """앱 종료시 정리"""
    logger.info(" Fortune Statistics Service 종료")
    scheduler_service.stop()
    await database_service.close()

def error_body(exc: FortuneServiceError) -> dict:
    body = ErrorResponse(error=exc.message)
    if isinstance(exc, InputValidationError) and exc.missing_fields:
        body.missing_fields = exc.missing_fields
    if isinstance(exc, UpstreamError):
        body.details = exc.body
        body.status = exc.status
    return body.model_dump(exclude_none=True)

@app.exception_handler(FortuneServiceError)
async def service_error_handler(request: Request, exc: FortuneServiceError):
    return JSONResponse(status_code=exc.code, content=error_body(exc))

@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    content = ErrorResponse(error="요청한 엔드포인트를 찾을 수 없습니다.").model_dump(exclude_none=True)
    return JSONResponse(status_code=404, content=content)

@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f" 서버 오류: {exc}")
    content = ErrorResponse(error="서버 내부 오류가 발생했습니다.").model_dump(exclude_none=True)
    return JSONResponse(status_code=500, content=content)

# 라우터 등록
app.include_router(fortune.router, prefix="/api")
app.include_router(statistics.router, prefix="/api")
app.include_router(ocr.router)

@app.get("/")
async def root():
    return {
        "service": "Fortune Statistics Service",
        "version": "1.0.0",
        "status": "running",
        "timestamp": datetime.now().isoformat(),
        "features": [
            "오늘의 운세",
            "무의식 리딩",
            "시간 밸런스",
            "이용 통계",
            "CLOVA OCR"
        ]
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "ocr_configured": bool(settings.clova_ocr_secret),
        "statistics": {
            "page_size": settings.statistics_page_size,
            "include_teens": settings.statistics_include_teens
        }
    }

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
