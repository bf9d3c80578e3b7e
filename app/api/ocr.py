# app/api/ocr.py

from fastapi import APIRouter, HTTPException

from app.schemas.ocr_schemas import OcrRequest
from app.services import ocr_service as ocr_module
from app.utils.exceptions import FortuneServiceError
from app.utils.logger import logger

router = APIRouter(tags=["ocr"])


@router.post("/clova-ocr")
async def clova_ocr(request: OcrRequest):
    """이미지(base64) → CLOVA OCR 결과 그대로 반환"""
    try:
        return await ocr_module.ocr_service.recognize(request.base64Image)

    except FortuneServiceError:
        raise
    except Exception as e:
        logger.error(f" OCR 처리 실패: {e}")
        raise HTTPException(status_code=500, detail="OCR 처리 중 오류 발생")
