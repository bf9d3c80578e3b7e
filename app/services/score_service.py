# app/services/score_service.py
"""
운세 점수 생성 (재물/애정/직업/건강)

점수는 생성된 운세 문장과 무관하게 확률표에 따라 독립적으로 뽑는다.
"""

import math
import random
from typing import Dict, Optional

# (누적확률 상한, 최소값, 폭)
# 75~79(폭 5) 구간과 70~79(폭 10) 구간은 값이 겹치지만 분포 호환을 위해 그대로 둔다
SCORE_BANDS = [
    (8, 95, 6),
    (25, 90, 5),
    (65, 80, 10),
    (80, 75, 5),
    (90, 70, 10),
    (98, 60, 10),
]
FALLBACK_BAND = (50, 10)

SCORE_FIELDS = ("money", "love", "career", "health")


def generate_score(rng: Optional[random.Random] = None) -> int:
    """50~100 사이 점수 1개"""
    rng = rng or random
    r = rng.random() * 100

    for upper, range_min, width in SCORE_BANDS:
        if r < upper:
            return math.floor(rng.random() * width) + range_min

    range_min, width = FALLBACK_BAND
    return math.floor(rng.random() * width) + range_min


def generate_score_set(rng: Optional[random.Random] = None) -> Dict[str, int]:
    scores = {field: generate_score(rng) for field in SCORE_FIELDS}
    mean = sum(scores[field] for field in SCORE_FIELDS) / len(SCORE_FIELDS)
    # .5는 올림
    scores["total"] = math.floor(mean + 0.5)
    return scores
