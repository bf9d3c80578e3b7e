"""
Pytest 전역 설정

Settings가 import 시점에 생성되므로 환경 변수는 app import 전에 채운다.
"""

import os
import sys
import tempfile
from types import SimpleNamespace

import pytest

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

_tmp_dir = tempfile.mkdtemp(prefix="fortune_test_")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("CLOVA_OCR_SECRET", "test-ocr-secret")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(_tmp_dir, 'app.db')}")
os.environ.setdefault("LOG_LEVEL", "WARNING")


class FakeStore:
    """DatabaseService 대용 (메모리 보관, 호출 기록)"""

    def __init__(self, usage=None, dropout=None):
        self.tables = {"usage": list(usage or []), "dropout": list(dropout or [])}
        self.page_calls = []
        self.deleted_before = []
        self.inserted = []

    async def select_page(self, table, offset, limit):
        self.page_calls.append((table, offset, limit))
        return self.tables[table][offset:offset + limit]

    async def select_all(self, table):
        return list(self.tables[table])

    async def select_by_time_window(self, table, start, end):
        return [r for r in self.tables[table] if start <= r["created_at"] < end]

    async def insert(self, table, **fields):
        self.inserted.append((table, fields))
        return f"{table}-{len(self.inserted)}"

    async def delete_all(self, table):
        count = len(self.tables[table])
        self.tables[table] = []
        return count

    async def delete_older_than(self, table, cutoff):
        self.deleted_before.append((table, cutoff))
        before = len(self.tables[table])
        self.tables[table] = [r for r in self.tables[table] if r["created_at"] >= cutoff]
        return before - len(self.tables[table])


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def stats_config():
    return SimpleNamespace(statistics_page_size=1000, statistics_include_teens=True)


@pytest.fixture(scope="session")
def client():
    """TestClient (startup 이벤트는 실행하지 않음)"""
    from fastapi.testclient import TestClient
    from app.main import app
    return TestClient(app)
