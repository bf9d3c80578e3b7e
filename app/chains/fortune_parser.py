# app/chains/fortune_parser.py
"""
GPT 운세 응답 파싱

JSON 우선 → 라벨 기반 줄 검색 → 기본 문장 순으로 처리하며,
어떤 경우에도 예외를 밖으로 던지지 않는다.
"""

import json
import re
from typing import Any, Dict, List, Optional, Tuple

from langchain_core.messages import AIMessage
from pydantic import BaseModel

from app.schemas.fortune_schemas import (
    BalanceResult,
    ContentKind,
    ForecastResult,
    SubconsciousResult,
)
from app.utils.logger import logger

FORECAST_DEFAULTS = {
    "fortune": "오늘은 서두르지 않고 차분하게 흐름을 따라가면 좋은 하루입니다. 작은 일에도 정성을 들이면 뜻밖의 도움이 찾아올 거예요.",
    "mbti_advice": "오늘은 나만의 속도를 지키면서 하고 싶은 일 하나를 끝까지 해보세요.",
}

SUBCONSCIOUS_DEFAULTS = {
    "helper": "당신의 무의식 속에는 주변을 세심하게 살피는 따뜻한 관찰자가 있어 어려운 순간마다 길을 찾게 도와줍니다.",
    "hinderer": "완벽하게 해내야 한다는 마음이 때때로 시작을 늦추고 스스로를 지치게 만들기도 합니다.",
    "advice": "조금 부족해도 먼저 한 걸음 내딛는 연습을 해보세요. 관찰자의 힘이 그 걸음을 단단하게 받쳐줄 거예요.",
}

BALANCE_DEFAULTS = {
    "past": "30% - 지나온 경험을 자주 돌아보며 그 안에서 배움을 찾는 편입니다.",
    "present": "45% - 지금 눈앞의 일과 사람에게 마음을 가장 많이 쓰고 있습니다.",
    "future": "25% - 앞으로의 계획을 조용히 그리며 천천히 준비하고 있습니다.",
}

# 줄 검색용 라벨 (필드, 라벨)
FORECAST_LABELS = [("fortune", "오늘의 운세"), ("mbti_advice", "MBTI 처방")]
SUBCONSCIOUS_LABELS = [("helper", "조력자"), ("hinderer", "방해꾼"), ("advice", "조언")]
BALANCE_LABELS = [("past", "과거"), ("present", "현재"), ("future", "미래")]

KIND_TABLE = {
    ContentKind.FORTUNE: (ForecastResult, FORECAST_DEFAULTS, FORECAST_LABELS, False),
    ContentKind.SUBCONSCIOUS: (SubconsciousResult, SUBCONSCIOUS_DEFAULTS, SUBCONSCIOUS_LABELS, True),
    ContentKind.BALANCE: (BalanceResult, BALANCE_DEFAULTS, BALANCE_LABELS, True),
}

FENCE_OPEN = re.compile(r"^\s*```[A-Za-z0-9_-]*\s*\n?")
FENCE_CLOSE = re.compile(r"\n?\s*```\s*$")
LABEL_SEPARATORS = " \t:：*-"


class FortuneResponseParser:
    """GPT 응답 → 콘텐츠 종류별 결과 모델"""

    def parse(self, text: Any, kind: ContentKind) -> BaseModel:
        model_cls, defaults, labels, json_first = KIND_TABLE[kind]

        try:
            if isinstance(text, AIMessage):
                text = text.content
            if not isinstance(text, str):
                text = "" if text is None else str(text)

            raw: Optional[Dict[str, Any]] = None
            if json_first:
                raw = self._parse_json(text)
                if raw is None:
                    logger.info(f" JSON 파싱 실패 → 라벨 검색으로 대체 ({kind.value})")
            if raw is None:
                raw = self._scan_labels(text, labels)

            return self._backfill(model_cls, defaults, raw)

        except Exception as e:
            logger.warning(f" 응답 파싱 실패 → 기본값 사용 ({kind.value}): {e}")
            return self.default_result(kind)

    def default_result(self, kind: ContentKind) -> BaseModel:
        model_cls, defaults, _, _ = KIND_TABLE[kind]
        return model_cls(**defaults)

    def _strip_code_fence(self, text: str) -> str:
        stripped = FENCE_OPEN.sub("", text.strip(), count=1)
        stripped = FENCE_CLOSE.sub("", stripped, count=1)
        return stripped.strip()

    def _parse_json(self, text: str) -> Optional[Dict[str, Any]]:
        try:
            data = json.loads(self._strip_code_fence(text))
        except (ValueError, TypeError):
            return None
        if not isinstance(data, dict):
            return None
        return data

    def _scan_labels(self, text: str, labels: List[Tuple[str, str]]) -> Dict[str, str]:
        lines = text.splitlines()
        found = {}

        for field, label in labels:
            for line in lines:
                if label in line:
                    value = line.split(label, 1)[1].strip().lstrip(LABEL_SEPARATORS).strip()
                    found[field] = value.strip('"').strip()
                    break

        return found

    def _backfill(self, model_cls, defaults: Dict[str, str], raw: Dict[str, Any]) -> BaseModel:
        """빠지거나 빈 필드는 기본 문장으로 채운다"""
        values = {}
        for field, default in defaults.items():
            value = raw.get(field)
            if isinstance(value, (dict, list)) or value is None:
                value = ""
            value = str(value).strip()
            values[field] = value or default
        return model_cls(**values)


fortune_response_parser = FortuneResponseParser()
