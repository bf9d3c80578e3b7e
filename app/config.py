# app/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict, Field
from typing import Optional

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="allow")

    # OpenAI (운세 생성용)
    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0.8
    openai_timeout: float = 60.0

    # CLOVA OCR
    clova_ocr_secret: Optional[str] = None
    clova_ocr_url: str = "https://f6oq8rjph7.apigw.ntruss.com/custom/v1/43607/c5ac14c78c057146887d11b5a4e9c0ad50c321faa6c3bf649e7beb6fc17ac8df/general"
    clova_ocr_timeout: float = 30.0

    # MySQL
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "root"
    mysql_password: str = ""
    mysql_database: str = "fortune_statistics"

    # 전체 URL 지정 시 mysql_* 설정보다 우선
    database_url: Optional[str] = None

    # Statistics Settings
    statistics_page_size: int = Field(1000, gt=0)
    statistics_include_teens: bool = True  # False면 30세 미만 전체를 20대로 집계

    # App Settings
    debug: bool = False
    log_level: str = "INFO"
    log_name: str = "fortune_server"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    scheduler_log_level: str = "WARNING"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"mysql+aiomysql://{self.mysql_user}:{self.mysql_password}@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"

settings = Settings()
