from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from app.utils.logger import logger
from app.services.database_service import KST, now_kst
from app.services.statistics_service import statistics_service

TRIM_INTERVAL = timedelta(hours=24)
TRIM_JOB_ID = "dropout_trim"

# 이벤트 루프 지연이나 절전으로 실행 시각을 놓쳐도 건너뛰지 않고 한 번만 실행
JOB_DEFAULTS = {"misfire_grace_time": None, "coalesce": True}


def next_midnight(now: datetime) -> datetime:
    return datetime.combine(now.date() + timedelta(days=1), datetime.min.time())


class SchedulerService:
    """
    이탈 기록 정리 스케줄러

    다음 자정부터 24시간 간격으로 반복하는 작업 하나를 등록한다.
    scheduler/clock/trim 함수는 테스트에서 바꿔 끼울 수 있다.
    """

    def __init__(
        self,
        trim_job: Optional[Callable[[], Awaitable[int]]] = None,
        scheduler=None,
        clock: Callable[[], datetime] = now_kst,
    ):
        self.scheduler = scheduler or AsyncIOScheduler(timezone=KST)
        self.trim_job = trim_job or statistics_service.trim_dropouts
        self.clock = clock
        logger.info(" SchedulerService 초기화 완료")

    def schedule_at(self, run_date: datetime, func, job_id: str):
        return self.scheduler.add_job(
            func=func,
            trigger=DateTrigger(run_date=run_date, timezone=KST),
            id=job_id,
            replace_existing=True,
            **JOB_DEFAULTS
        )

    def repeat_every(self, interval: timedelta, func, job_id: str, start_date: Optional[datetime] = None):
        return self.scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(
                seconds=int(interval.total_seconds()),
                start_date=start_date,
                timezone=KST
            ),
            id=job_id,
            replace_existing=True,
            **JOB_DEFAULTS
        )

    def cancel(self, job_id: str):
        if self.scheduler.get_job(job_id):
            self.scheduler.remove_job(job_id)

    def start(self):
        try:
            first_run = next_midnight(self.clock())
            self.repeat_every(TRIM_INTERVAL, self.dropout_trim_job, TRIM_JOB_ID, start_date=first_run)
            self.scheduler.start()
            logger.info(f" 스케줄러 시작 - 이탈 기록 정리 작업 등록 (첫 실행: {first_run.isoformat()}, 24시간 간격)")
        except Exception as e:
            logger.error(f" 스케줄러 시작 실패: {e}")

    def stop(self):
        try:
            self.cancel(TRIM_JOB_ID)
            self.scheduler.shutdown()
            logger.info(" 스케줄러 종료")
        except Exception as e:
            logger.error(f" 스케줄러 종료 실패: {e}")

    async def dropout_trim_job(self):
        try:
            logger.info(" 이탈 기록 정리 작업 시작")
            deleted = await self.trim_job()
            logger.info(f" 이탈 기록 정리 완료: {deleted}건 삭제")
        except Exception as e:
            logger.error(f" 이탈 기록 정리 작업 실패: {e}")

scheduler_service = SchedulerService()
