# app/chains/fortune_chain.py
"""
운세 콘텐츠 생성 체인

콘텐츠 종류(ContentKind)별로 프롬프트 함수/파서/점수 여부만 다르고
나머지 흐름(특성 계산 → 프롬프트 → 생성 → 파싱)은 하나로 처리한다.
"""

import random
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from app.chains.fortune_parser import FortuneResponseParser, fortune_response_parser
from app.prompts.fortune_prompt import build_prompt
from app.schemas.fortune_schemas import (
    ContentKind,
    DerivedFeatures,
    FortuneResponse,
    ScoreSet,
)
from app.services.calendar_service import derive_features
from app.services.llm_service import GenerationService
from app.services.score_service import generate_score_set
from app.utils.exceptions import InputValidationError
from app.utils.logger import logger


@dataclass(frozen=True)
class ContentDescriptor:
    kind: ContentKind
    with_scores: bool = False


CONTENT_DESCRIPTORS = {
    ContentKind.FORTUNE: ContentDescriptor(ContentKind.FORTUNE, with_scores=True),
    ContentKind.SUBCONSCIOUS: ContentDescriptor(ContentKind.SUBCONSCIOUS),
    ContentKind.BALANCE: ContentDescriptor(ContentKind.BALANCE),
}


def validate_profile(profile: Dict) -> None:
    birthdate = (profile.get("birthdate") or "").strip()
    if not birthdate:
        raise InputValidationError("필수 필드가 누락되었습니다.", missing_fields=["birthdate"])
    if len(birthdate) != 8 or not birthdate.isdigit():
        raise InputValidationError("birthdate는 YYYYMMDD 형식의 8자리 숫자여야 합니다.")

    birthtime = profile.get("birthtime")
    if birthtime:
        hour, sep, minute = birthtime.partition(":")
        if not sep or not hour.isdigit() or not minute.isdigit():
            raise InputValidationError("birthtime은 HH:MM 형식이어야 합니다.")


class FortuneChain:
    """운세 콘텐츠 생성 메인 클래스"""

    def __init__(
        self,
        generation_service: Optional[GenerationService] = None,
        parser: FortuneResponseParser = fortune_response_parser,
        rng: Optional[random.Random] = None,
    ):
        self._generation_service = generation_service
        self.parser = parser
        self.rng = rng

    @property
    def generation_service(self) -> GenerationService:
        if self._generation_service is None:
            self._generation_service = GenerationService()
        return self._generation_service

    async def generate(self, kind: ContentKind, profile: Dict) -> FortuneResponse:
        descriptor = CONTENT_DESCRIPTORS[kind]
        start_time = time.time()

        validate_profile(profile)
        profile = {**profile, "birthdate": profile["birthdate"].strip()}

        features = derive_features(profile["birthdate"], profile.get("birthtime"))
        logger.info(f" {kind.value} 생성 요청: {features}")

        prompt = build_prompt(kind, profile, features)
        raw_text = await self.generation_service.complete(prompt)

        result = self.parser.parse(raw_text, kind)
        if descriptor.with_scores:
            result.scores = ScoreSet(**generate_score_set(self.rng))

        logger.info(f" {kind.value} 생성 완료 ({round(time.time() - start_time, 2)}초)")

        return FortuneResponse(
            status="success",
            kind=kind,
            features=DerivedFeatures(**features),
            result=result,
            timestamp=datetime.now().isoformat(),
        )


# 인스턴스
fortune_chain = FortuneChain()
