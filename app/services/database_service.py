# app/services/database_service.py
"""
MySQL 데이터베이스 서비스
SQLAlchemy 기반 비동기 DB 연결
"""

from typing import Dict, List, Optional
from datetime import datetime, timezone, timedelta
import uuid

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, String, Text, DateTime, Date, delete
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.utils.exceptions import StoreError
from app.utils.logger import logger

# 공통 시간대 (한국 시간)
KST = timezone(timedelta(hours=9))
def now_kst():
    """DATETIME 컬럼 저장용 한국 시간 (tzinfo 없음)"""
    return datetime.now(KST).replace(tzinfo=None)

Base = declarative_base()

class UsageRecord(Base):
    __tablename__ = "statistics_TB"
    STAT_ID = Column(String(36), primary_key=True)
    GENDER = Column(String(10), nullable=False)
    BIRTH_DATE = Column(Date, nullable=False)
    TIME_SLOT = Column(String(20), nullable=False)
    WEEKDAY = Column(String(10), nullable=False)
    MBTI = Column(String(4))
    SELECTED_SERVICE = Column(String(20), nullable=False)
    CREATED_AT = Column(DateTime, default=now_kst, nullable=False, index=True)

    def to_dict(self) -> Dict:
        return {
            "id": self.STAT_ID,
            "gender": self.GENDER,
            "birth_date": self.BIRTH_DATE,
            "time_slot": self.TIME_SLOT,
            "weekday": self.WEEKDAY,
            "mbti": self.MBTI,
            "selected_service": self.SELECTED_SERVICE,
            "created_at": self.CREATED_AT,
        }

class DropoutRecord(Base):
    __tablename__ = "dropout_TB"
    DROPOUT_ID = Column(String(36), primary_key=True)
    REASON = Column(Text)
    CREATED_AT = Column(DateTime, default=now_kst, nullable=False, index=True)

    def to_dict(self) -> Dict:
        return {
            "id": self.DROPOUT_ID,
            "reason": self.REASON,
            "created_at": self.CREATED_AT,
        }

USAGE_TABLE = "usage"
DROPOUT_TABLE = "dropout"

TABLES = {
    USAGE_TABLE: (UsageRecord, "STAT_ID"),
    DROPOUT_TABLE: (DropoutRecord, "DROPOUT_ID"),
}

class DatabaseService:
    def __init__(self, database_url: Optional[str] = None, echo: bool = settings.debug):
        self.database_url = database_url or settings.sqlalchemy_url
        self.engine = create_async_engine(self.database_url, echo=echo, pool_pre_ping=True, pool_recycle=3600)
        self.async_session = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(" DatabaseService 초기화 완료")

    def _model(self, table: str):
        if table not in TABLES:
            raise ValueError(f"지원하지 않는 테이블입니다: {table}")
        return TABLES[table][0]

    async def create_tables(self):
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info(" 데이터베이스 테이블 생성 완료")
        except SQLAlchemyError as e:
            logger.error(f" 테이블 생성 실패: {e}")
            raise StoreError(str(e)) from e

    async def insert(self, table: str, **fields) -> str:
        model = self._model(table)
        id_column = TABLES[table][1]
        record_id = str(uuid.uuid4())
        try:
            async with self.async_session() as session:
                session.add(model(**{id_column: record_id}, **fields))
                await session.commit()
            logger.info(f" {table} 기록 저장 완료: {record_id}")
            return record_id
        except SQLAlchemyError as e:
            logger.error(f" {table} 기록 저장 실패: {e}")
            raise StoreError(str(e)) from e

    async def select_all(self, table: str) -> List[Dict]:
        model = self._model(table)
        try:
            async with self.async_session() as session:
                query = select(model).order_by(model.CREATED_AT.desc())
                result = await session.execute(query)
                return [row.to_dict() for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f" {table} 전체 조회 실패: {e}")
            raise StoreError(str(e)) from e

    async def select_page(self, table: str, offset: int, limit: int) -> List[Dict]:
        model = self._model(table)
        try:
            async with self.async_session() as session:
                query = select(model).order_by(model.CREATED_AT.desc()).offset(offset).limit(limit)
                result = await session.execute(query)
                return [row.to_dict() for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f" {table} 페이지 조회 실패 (offset={offset}): {e}")
            raise StoreError(str(e)) from e

    async def select_by_time_window(self, table: str, start: datetime, end: datetime) -> List[Dict]:
        """start 이상 end 미만"""
        model = self._model(table)
        try:
            async with self.async_session() as session:
                query = select(model).where(
                    model.CREATED_AT >= start,
                    model.CREATED_AT < end
                ).order_by(model.CREATED_AT.desc())
                result = await session.execute(query)
                return [row.to_dict() for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f" {table} 기간 조회 실패: {e}")
            raise StoreError(str(e)) from e

    async def delete_all(self, table: str) -> int:
        model = self._model(table)
        try:
            async with self.async_session() as session:
                result = await session.execute(delete(model))
                await session.commit()
            logger.info(f" {table} 전체 삭제 완료 ({result.rowcount}건)")
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f" {table} 전체 삭제 실패: {e}")
            raise StoreError(str(e)) from e

    async def delete_older_than(self, table: str, cutoff: datetime) -> int:
        model = self._model(table)
        try:
            async with self.async_session() as session:
                result = await session.execute(delete(model).where(model.CREATED_AT < cutoff))
                await session.commit()
            logger.info(f" {table} 정리 완료: {cutoff.isoformat()} 이전 {result.rowcount}건 삭제")
            return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f" {table} 정리 실패: {e}")
            raise StoreError(str(e)) from e

    async def close(self):
        await self.engine.dispose()
        logger.info("🔌 데이터베이스 연결 종료")

# 전역 인스턴스화
database_service = DatabaseService()
