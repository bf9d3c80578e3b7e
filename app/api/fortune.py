# app/api/fortune.py
"""
운세 콘텐츠 생성 API (오늘의 운세 / 무의식 / 시간 밸런스)
"""

from fastapi import APIRouter, HTTPException

from app.chains import fortune_chain as chain_module
from app.schemas.fortune_schemas import BirthProfileRequest, ContentKind, FortuneResponse
from app.utils.exceptions import FortuneServiceError
from app.utils.logger import logger

router = APIRouter(prefix="/fortune", tags=["fortune"])


def _make_handler(kind: ContentKind):
    async def generate_content(request: BirthProfileRequest) -> FortuneResponse:
        try:
            logger.info(f" {kind.value} 요청: birthdate={request.birthdate}, mbti={request.mbti}")
            return await chain_module.fortune_chain.generate(kind, request.model_dump())

        except FortuneServiceError:
            raise
        except Exception as e:
            logger.error(f" {kind.value} 생성 실패: {e}")
            raise HTTPException(status_code=500, detail="콘텐츠 생성 중 오류가 발생했습니다.")

    generate_content.__name__ = f"generate_{kind.value}"
    return generate_content


for content_kind in ContentKind:
    router.add_api_route(
        f"/{content_kind.value}",
        _make_handler(content_kind),
        methods=["POST"],
        response_model=FortuneResponse,
        name=f"generate_{content_kind.value}",
    )
