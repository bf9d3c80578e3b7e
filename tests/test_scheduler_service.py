"""
이탈 기록 정리 스케줄러 테스트
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from app.services.database_service import KST, now_kst
from app.services.scheduler_service import (
    TRIM_INTERVAL,
    TRIM_JOB_ID,
    SchedulerService,
    next_midnight,
)
from app.utils.exceptions import StoreError

NOW = datetime(2026, 10, 17, 15, 30)


class FakeJob:
    def __init__(self, func, trigger, job_id, options):
        self.func = func
        self.trigger = trigger
        self.id = job_id
        self.options = options


class FakeScheduler:
    def __init__(self):
        self.jobs = {}
        self.started = False
        self.shut_down = False

    def add_job(self, func, trigger, id, replace_existing=False, **options):
        job = FakeJob(func, trigger, id, options)
        self.jobs[id] = job
        return job

    def get_job(self, job_id):
        return self.jobs.get(job_id)

    def remove_job(self, job_id):
        del self.jobs[job_id]

    def start(self):
        self.started = True

    def shutdown(self):
        self.shut_down = True


@pytest.fixture
def scheduler():
    return FakeScheduler()


def _service(scheduler, trim_job, clock=lambda: NOW):
    return SchedulerService(trim_job=trim_job, scheduler=scheduler, clock=clock)


def test_next_midnight():
    assert next_midnight(NOW) == datetime(2026, 10, 18, 0, 0)
    assert next_midnight(datetime(2026, 12, 31, 0, 0)) == datetime(2027, 1, 1, 0, 0)


class TestSchedulerService:

    def test_start_registers_single_daily_job_from_midnight(self, scheduler):
        service = _service(scheduler, AsyncMock(return_value=0))
        service.start()

        assert scheduler.started
        assert list(scheduler.jobs) == [TRIM_JOB_ID]
        job = scheduler.get_job(TRIM_JOB_ID)
        assert isinstance(job.trigger, IntervalTrigger)
        assert job.trigger.interval == timedelta(hours=24)
        assert job.trigger.start_date.replace(tzinfo=None) == datetime(2026, 10, 18, 0, 0)

    def test_late_runs_are_not_dropped(self, scheduler):
        service = _service(scheduler, AsyncMock(return_value=0))
        service.start()

        options = scheduler.get_job(TRIM_JOB_ID).options
        assert options["misfire_grace_time"] is None
        assert options["coalesce"] is True

    async def test_job_survives_each_run(self, scheduler):
        trim = AsyncMock(return_value=3)
        service = _service(scheduler, trim)
        service.start()

        await scheduler.get_job(TRIM_JOB_ID).func()
        await scheduler.get_job(TRIM_JOB_ID).func()

        assert trim.await_count == 2
        assert scheduler.get_job(TRIM_JOB_ID) is not None

    async def test_failed_trim_is_logged_and_job_kept(self, scheduler, caplog):
        trim = AsyncMock(side_effect=StoreError("connection lost"))
        service = _service(scheduler, trim)
        service.start()

        await scheduler.get_job(TRIM_JOB_ID).func()

        assert "connection lost" in caplog.text
        assert scheduler.get_job(TRIM_JOB_ID) is not None

    def test_schedule_at(self, scheduler):
        service = _service(scheduler, AsyncMock(return_value=0))
        job = service.schedule_at(datetime(2026, 10, 18, 0, 0), service.dropout_trim_job, "once")

        assert isinstance(job.trigger, DateTrigger)
        assert job.trigger.run_date.replace(tzinfo=None) == datetime(2026, 10, 18, 0, 0)
        assert job.options["misfire_grace_time"] is None

    def test_stop_cancels_jobs(self, scheduler):
        service = _service(scheduler, AsyncMock(return_value=0))
        service.start()

        service.stop()

        assert scheduler.jobs == {}
        assert scheduler.shut_down

    def test_cancel_unknown_job_is_noop(self, scheduler):
        service = _service(scheduler, AsyncMock(return_value=0))
        service.cancel("missing")
        assert scheduler.jobs == {}


class TestWithAsyncIOScheduler:

    async def test_start_date_in_the_past_keeps_schedule_alive(self):
        # 시계가 하루 늦어 첫 자정이 이미 지나간 경우
        real_scheduler = AsyncIOScheduler(timezone=KST)
        trim = AsyncMock(return_value=0)
        service = SchedulerService(
            trim_job=trim,
            scheduler=real_scheduler,
            clock=lambda: now_kst() - timedelta(days=1),
        )
        service.start()
        try:
            job = real_scheduler.get_job(TRIM_JOB_ID)

            assert job is not None
            assert job.misfire_grace_time is None
            assert job.coalesce is True
            assert job.trigger.interval == TRIM_INTERVAL
            next_run = job.next_run_time.astimezone(KST).replace(tzinfo=None)
            assert now_kst() < next_run <= now_kst() + TRIM_INTERVAL
        finally:
            service.stop()

        assert real_scheduler.get_job(TRIM_JOB_ID) is None
