from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import os

load_dotenv()

class Settings(BaseSettings):
    APP_NAME: str = "flightpax-search-api"
    DEBUG: bool = False

    # 호스트/포트 중 하나라도 없으면 검색 엔진 연동을 비활성화한다.
    OPENSEARCH_HOSTNAME: str | None = os.getenv('OPENSEARCH_HOSTNAME')
    OPENSEARCH_PORT: int | None = None
    OPENSEARCH_SCHEME: str = os.getenv('OPENSEARCH_SCHEME', 'http')
    OPENSEARCH_INDEX: str = os.getenv('OPENSEARCH_INDEX', 'gtas')
    OPENSEARCH_RETRY_ON_CONFLICT: int = 3

    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"

    @property
    def opensearch_configured(self) -> bool:
        return bool(self.OPENSEARCH_HOSTNAME) and self.OPENSEARCH_PORT is not None

settings = Settings()
