# app/services/ocr_service.py
import time
import aiohttp
from typing import Any, Dict

from app.config import Settings, settings
from app.utils.exceptions import FortuneServiceError, InputValidationError, UpstreamError
from app.utils.logger import logger


class OcrService:
    """CLOVA OCR 호출 (이미지 → 인식 결과 그대로 전달)"""

    def __init__(self, config: Settings = settings):
        self.url = config.clova_ocr_url
        self.secret = config.clova_ocr_secret
        self.timeout = config.clova_ocr_timeout

    def _build_payload(self, base64_image: str) -> Dict[str, Any]:
        timestamp = int(time.time() * 1000)
        return {
            "images": [{
                "format": "jpg",
                "name": "ocr_image",
                "data": base64_image
            }],
            "requestId": str(timestamp),
            "version": "V2",
            "timestamp": timestamp
        }

    async def recognize(self, base64_image: str) -> Dict[str, Any]:
        if not base64_image:
            raise InputValidationError("base64Image가 필요합니다.", missing_fields=["base64Image"])

        if not self.secret:
            logger.error(" CLOVA OCR Secret이 설정되지 않았습니다.")
            raise FortuneServiceError("서버 설정 오류: CLOVA OCR Secret이 필요합니다.", code=500)

        headers = {
            "Content-Type": "application/json",
            "X-OCR-SECRET": self.secret
        }

        logger.info(" CLOVA OCR API 요청 시작")
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.url, headers=headers, json=self._build_payload(base64_image)) as response:
                    if response.status >= 400:
                        error_body = await self._read_body(response)
                        logger.error(f" CLOVA OCR API 오류: {response.status} - {error_body}")
                        raise UpstreamError("CLOVA OCR API 오류", status=response.status, body=error_body)

                    data = await response.json(content_type=None)
                    logger.info(" CLOVA OCR API 응답 성공")
                    return data

        except UpstreamError:
            raise
        except Exception as e:
            logger.error(f" CLOVA OCR 처리 실패: {e}")
            raise UpstreamError("OCR 처리 중 오류 발생", body=str(e)) from e

    async def _read_body(self, response: aiohttp.ClientResponse) -> Any:
        try:
            return await response.json(content_type=None)
        except Exception:
            return await response.text()


ocr_service = OcrService()
