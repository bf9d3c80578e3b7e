# app/services/calendar_service.py
"""
생년월일/시간 기반 띠, 별자리, 시진 계산
"""

from typing import Dict, Optional, Tuple

# 띠 (1984년 = 쥐띠 기준)
ZODIAC_ANIMALS = [
    "rat", "ox", "tiger", "rabbit", "dragon", "snake",
    "horse", "goat", "monkey", "rooster", "dog", "pig"
]

# (별자리, (시작월, 시작일), (종료월, 종료일))
STAR_SIGNS = [
    ("Aries", (3, 21), (4, 19)),
    ("Taurus", (4, 20), (5, 20)),
    ("Gemini", (5, 21), (6, 21)),
    ("Cancer", (6, 22), (7, 22)),
    ("Leo", (7, 23), (8, 22)),
    ("Virgo", (8, 23), (9, 22)),
    ("Libra", (9, 23), (10, 22)),
    ("Scorpio", (10, 23), (11, 22)),
    ("Sagittarius", (11, 23), (12, 21)),
    ("Capricorn", (12, 22), (1, 19)),
    ("Aquarius", (1, 20), (2, 18)),
    ("Pisces", (2, 19), (3, 20)),
]

# (시진, 시작시, 종료시) - 자시는 23시~1시
TIME_BRANCHES = [
    ("자시", 23, 1),
    ("축시", 1, 3),
    ("인시", 3, 5),
    ("묘시", 5, 7),
    ("진시", 7, 9),
    ("사시", 9, 11),
    ("오시", 11, 13),
    ("미시", 13, 15),
    ("신시", 15, 17),
    ("유시", 17, 19),
    ("술시", 19, 21),
    ("해시", 21, 23),
]

TIME_NOT_PROVIDED = "not provided"


def animal_sign(year: int) -> str:
    index = ((year - 4) % 12 + 12) % 12
    return ZODIAC_ANIMALS[index]


def star_sign(month: int, day: int) -> str:
    current = month * 100 + day

    for name, (start_month, start_day), (end_month, end_day) in STAR_SIGNS:
        start = start_month * 100 + start_day
        end = end_month * 100 + end_day

        if start <= end:
            if start <= current <= end:
                return name
        elif current >= start or current <= end:
            # 12월 → 1월 넘어가는 구간
            return name

    return STAR_SIGNS[0][0]


def time_branch(hour: int, minute: int = 0) -> str:
    """
    시(hour) 기준 시진 반환. minute은 판정에 사용하지 않음.

    자시는 (23, 1)로 정의되어 있어 범위 조건에 걸리지 않고,
    23시/0시는 기본값(자시)으로 떨어진다.
    """
    for name, start, end in TIME_BRANCHES:
        if hour >= start and hour < end:
            return name

    return TIME_BRANCHES[0][0]


def split_birthdate(birthdate: str) -> Tuple[int, int, int]:
    """YYYYMMDD → (년, 월, 일). 달력상 유효성은 검사하지 않음"""
    return int(birthdate[0:4]), int(birthdate[4:6]), int(birthdate[6:8])


def parse_birthtime(birthtime: str) -> Tuple[int, int]:
    hour, _, minute = birthtime.partition(":")
    return int(hour), int(minute or 0)


def derive_features(birthdate: str, birthtime: Optional[str] = None) -> Dict[str, str]:
    """생년월일(+시간) → 띠/별자리/시진"""
    year, month, day = split_birthdate(birthdate)

    if birthtime:
        hour, minute = parse_birthtime(birthtime)
        branch = time_branch(hour, minute)
    else:
        branch = TIME_NOT_PROVIDED

    return {
        "zodiac_animal": animal_sign(year),
        "star_sign": star_sign(month, day),
        "time_branch": branch,
    }
