# app/services/statistics_service.py
"""
사용 통계 집계 서비스

- 전체 사용 기록을 페이지 단위로 순차 조회
- 성별/연령대/MBTI/서비스/시간대/요일별 집계
- 오늘 기준 이탈률 계산
- CSV 내보내기
- 이탈 기록 보관 기간 정리
"""

import math
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from app.config import Settings, settings
from app.schemas.fortune_schemas import ContentKind
from app.services.database_service import (
    DROPOUT_TABLE,
    USAGE_TABLE,
    DatabaseService,
    database_service,
    now_kst,
)
from app.utils.logger import logger

# 이탈률 분모로 쓰는 AI 콘텐츠 서비스
AI_CONTENT_SERVICES = frozenset(kind.value for kind in ContentKind)

CSV_COLUMNS = [
    ("ID", "id"),
    ("성별", "gender"),
    ("생년월일", "birth_date"),
    ("MBTI", "mbti"),
    ("서비스", "selected_service"),
    ("요일", "weekday"),
    ("시간대", "time_slot"),
    ("생성일시", "created_at"),
]


def age_bucket(birth_year: int, current_year: int, include_teens: bool = True) -> str:
    """나이 = 올해 - 출생연도 (월/일은 보지 않음)"""
    age = current_year - birth_year
    if include_teens and age < 20:
        return "teens"
    if age < 30:
        return "20s"
    if age < 40:
        return "30s"
    if age < 50:
        return "40s"
    return "50s+"


def compute_buckets(records: Iterable[Dict], current_year: int, include_teens: bool = True) -> Dict[str, Dict[str, int]]:
    gender_stats = Counter()
    age_stats = Counter()
    mbti_stats = Counter()
    service_stats = Counter()
    time_stats = Counter()
    weekday_stats = Counter()

    for record in records:
        gender_stats[record["gender"]] += 1

        birth_date = record.get("birth_date")
        if birth_date:
            age_stats[age_bucket(birth_date.year, current_year, include_teens)] += 1

        if record.get("mbti"):
            mbti_stats[record["mbti"]] += 1

        service_stats[record["selected_service"]] += 1
        time_stats[record["time_slot"]] += 1
        weekday_stats[record["weekday"]] += 1

    return {
        "gender_stats": dict(gender_stats),
        "age_stats": dict(age_stats),
        "mbti_stats": dict(mbti_stats),
        "service_stats": dict(service_stats),
        "time_stats": dict(time_stats),
        "weekday_stats": dict(weekday_stats),
    }


def _in_window(record: Dict, start: datetime, end: datetime) -> bool:
    created_at = record.get("created_at")
    return created_at is not None and start <= created_at < end


def compute_dropout_rate(
    usage_records: Iterable[Dict],
    dropout_records: Iterable[Dict],
    start: datetime,
    end: datetime,
) -> Tuple[int, int, int]:
    """(이탈률, 이탈 수, AI 콘텐츠 선택 수) - 기간은 [start, end)"""
    selections = sum(
        1 for record in usage_records
        if _in_window(record, start, end) and record.get("selected_service") in AI_CONTENT_SERVICES
    )
    dropouts = sum(1 for record in dropout_records if _in_window(record, start, end))

    if selections == 0:
        return 0, dropouts, selections
    return math.floor(100 * dropouts / selections + 0.5), dropouts, selections


def day_window(now: datetime) -> Tuple[datetime, datetime]:
    start = datetime.combine(now.date(), datetime.min.time())
    return start, start + timedelta(days=1)


def _csv_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def export_csv(records: Iterable[Dict]) -> str:
    """
    헤더 + 기록별 한 줄. 값은 따옴표/이스케이프 없이 쉼표로만 이어 붙인다.
    값 안에 쉼표나 줄바꿈이 있으면 CSV가 깨진다.
    """
    header = ",".join(title for title, _ in CSV_COLUMNS)
    rows = [
        ",".join(_csv_value(record.get(key)) for _, key in CSV_COLUMNS)
        for record in records
    ]
    return header + "\n" + "\n".join(rows)


class StatisticsService:
    def __init__(self, store: DatabaseService = database_service, config: Settings = settings, clock=now_kst):
        self.store = store
        self.page_size = config.statistics_page_size
        self.include_teens = config.statistics_include_teens
        self.clock = clock

    async def fetch_all(self, table: str = USAGE_TABLE) -> List[Dict]:
        """created_at 내림차순, page_size 단위 순차 조회. 짧은 페이지가 오면 종료"""
        records: List[Dict] = []
        offset = 0

        while True:
            page = await self.store.select_page(table, offset=offset, limit=self.page_size)
            records.extend(page)
            if len(page) < self.page_size:
                break
            offset += self.page_size

        logger.debug(f" {table} 전체 조회: {len(records)}건")
        return records

    async def save_usage(
        self,
        gender: str,
        birth_date: date,
        time_slot: str,
        weekday: str,
        selected_service: str,
        mbti: Optional[str] = None,
    ) -> str:
        return await self.store.insert(
            USAGE_TABLE,
            GENDER=gender,
            BIRTH_DATE=birth_date,
            TIME_SLOT=time_slot,
            WEEKDAY=weekday,
            MBTI=mbti or None,
            SELECTED_SERVICE=selected_service,
            CREATED_AT=self.clock(),
        )

    async def report_dropout(self, reason: str) -> str:
        return await self.store.insert(DROPOUT_TABLE, REASON=reason, CREATED_AT=self.clock())

    async def get_statistics(self) -> Dict:
        now = self.clock()
        records = await self.fetch_all(USAGE_TABLE)
        stats = compute_buckets(records, now.year, self.include_teens)

        start, end = day_window(now)
        dropouts = await self.store.select_by_time_window(DROPOUT_TABLE, start, end)
        dropout_rate, dropout_count, selections = compute_dropout_rate(records, dropouts, start, end)

        logger.info(f" 통계 집계 완료: 전체 {len(records)}건, 오늘 이탈 {dropout_count}/{selections}")

        return {
            "total_users": len(records),
            **stats,
            "dropout_rate": dropout_rate,
            "dropout_count": dropout_count,
        }

    async def reset_statistics(self) -> int:
        """사용 기록 전체 삭제 (이탈 기록은 유지)"""
        return await self.store.delete_all(USAGE_TABLE)

    async def export_statistics(self) -> str:
        records = await self.store.select_all(USAGE_TABLE)
        return export_csv(records)

    async def trim_dropouts(self, now: Optional[datetime] = None) -> int:
        """어제 0시 이전 이탈 기록 삭제"""
        now = now or self.clock()
        today_start, _ = day_window(now)
        cutoff = today_start - timedelta(days=1)
        return await self.store.delete_older_than(DROPOUT_TABLE, cutoff)


statistics_service = StatisticsService()
