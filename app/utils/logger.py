import logging
from typing import Optional

from app.config import settings

def setup_logger(name: Optional[str] = None) -> logging.Logger:
    """
    서비스 로거 설정

    이름/레벨/포맷은 settings에서 읽는다. APScheduler는 작업 실행마다
    INFO 로그를 남기므로 scheduler_log_level로 따로 조절한다.
    """

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.getLogger("apscheduler").setLevel(
        getattr(logging, settings.scheduler_log_level.upper(), logging.WARNING)
    )

    logger = logging.getLogger(name or settings.log_name)
    logger.setLevel(level)

    # 핸들러 중복 등록 방지
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(settings.log_format))
    logger.addHandler(handler)

    return logger

logger = setup_logger()
