"""
DatabaseService 테스트 (aiosqlite 파일 DB)
"""

from datetime import date, datetime, timedelta

import pytest

from app.services.database_service import DROPOUT_TABLE, USAGE_TABLE, DatabaseService
from app.utils.exceptions import StoreError

BASE = datetime(2026, 10, 17, 9, 0)


@pytest.fixture
async def db(tmp_path):
    service = DatabaseService(database_url=f"sqlite+aiosqlite:///{tmp_path / 'stats.db'}", echo=False)
    await service.create_tables()
    yield service
    await service.close()


async def _insert_usage(db, minutes, service="fortune", mbti=None):
    return await db.insert(
        USAGE_TABLE,
        GENDER="여성",
        BIRTH_DATE=date(1995, 5, 1),
        TIME_SLOT="오전",
        WEEKDAY="토요일",
        MBTI=mbti,
        SELECTED_SERVICE=service,
        CREATED_AT=BASE + timedelta(minutes=minutes),
    )


class TestDatabaseService:

    async def test_insert_and_select_all_newest_first(self, db):
        first = await _insert_usage(db, 0)
        second = await _insert_usage(db, 5, mbti="ENFP")

        rows = await db.select_all(USAGE_TABLE)

        assert [row["id"] for row in rows] == [second, first]
        assert rows[0]["mbti"] == "ENFP"
        assert rows[0]["birth_date"] == date(1995, 5, 1)
        assert rows[1]["mbti"] is None

    async def test_select_page(self, db):
        for minutes in range(5):
            await _insert_usage(db, minutes)

        page1 = await db.select_page(USAGE_TABLE, offset=0, limit=2)
        page3 = await db.select_page(USAGE_TABLE, offset=4, limit=2)
        empty = await db.select_page(USAGE_TABLE, offset=5, limit=2)

        assert [row["created_at"] for row in page1] == [BASE + timedelta(minutes=4), BASE + timedelta(minutes=3)]
        assert len(page3) == 1
        assert empty == []

    async def test_time_window_is_half_open(self, db):
        await _insert_usage(db, 0)
        await _insert_usage(db, 60)

        rows = await db.select_by_time_window(USAGE_TABLE, BASE, BASE + timedelta(minutes=60))
        assert len(rows) == 1

    async def test_delete_older_than_only_touches_table(self, db):
        await _insert_usage(db, -3000)
        await db.insert(DROPOUT_TABLE, REASON="old", CREATED_AT=BASE - timedelta(days=3))
        await db.insert(DROPOUT_TABLE, REASON="new", CREATED_AT=BASE)

        deleted = await db.delete_older_than(DROPOUT_TABLE, BASE - timedelta(days=1))

        assert deleted == 1
        assert [row["reason"] for row in await db.select_all(DROPOUT_TABLE)] == ["new"]
        assert len(await db.select_all(USAGE_TABLE)) == 1

    async def test_delete_all(self, db):
        await _insert_usage(db, 0)
        await _insert_usage(db, 1)
        await db.insert(DROPOUT_TABLE, REASON="ocr", CREATED_AT=BASE)

        assert await db.delete_all(USAGE_TABLE) == 2
        assert await db.select_all(USAGE_TABLE) == []
        assert len(await db.select_all(DROPOUT_TABLE)) == 1

    async def test_missing_required_column_raises_store_error(self, db):
        with pytest.raises(StoreError):
            await db.insert(USAGE_TABLE, GENDER="여성", CREATED_AT=BASE)

    async def test_unknown_table(self, db):
        with pytest.raises(ValueError):
            await db.select_all("letters")
