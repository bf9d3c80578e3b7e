# app/services/llm_service.py
"""
생성형 AI(OpenAI) 호출 래퍼
"""

from typing import Optional

import openai
from langchain_core.messages import AIMessage
from langchain_openai import ChatOpenAI

from app.config import Settings, settings
from app.utils.exceptions import UpstreamError
from app.utils.logger import logger


class GenerationService:
    def __init__(self, config: Settings = settings, llm: Optional[ChatOpenAI] = None):
        self.llm = llm or ChatOpenAI(
            model=config.openai_model,
            temperature=config.openai_temperature,
            openai_api_key=config.openai_api_key,
            timeout=config.openai_timeout,
        )

    async def complete(self, prompt: str) -> str:
        """프롬프트 → 원본 응답 텍스트"""
        try:
            response = await self.llm.ainvoke([{"role": "user", "content": prompt}])
        except openai.APIStatusError as e:
            logger.error(f" OpenAI API 오류: {e.status_code} - {e.body}")
            raise UpstreamError("OpenAI API 오류", status=e.status_code, body=e.body) from e
        except Exception as e:
            logger.error(f" OpenAI 호출 실패: {e}")
            raise UpstreamError("AI 응답 생성 중 오류가 발생했습니다.") from e

        content = response.content if isinstance(response, AIMessage) else response
        if not isinstance(content, str):
            content = "" if content is None else str(content)
        if not content.strip():
            logger.error(" OpenAI 응답이 비어있음")
            raise UpstreamError("empty response")

        return content.strip()
