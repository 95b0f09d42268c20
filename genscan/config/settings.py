"""프로젝트 설정"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """genscan 설정"""

    # 프로젝트 경로
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # 로컬 식약처 허가 데이터 (엑셀)
    MFDS_DATA_PATH: Path = DATA_DIR / "mfds-data.xlsx"

    # 공공데이터 API (식약처 의약품 제품 허가정보)
    DATA_GO_KR_API_KEY: Optional[str] = None
    MFDS_BASE_URL: str = "https://apis.data.go.kr/1471000/DrugPrdtPrmsnInfoService07"
    MFDS_TIMEOUT: float = 30.0
    MFDS_MAX_RETRIES: int = 3
    MFDS_NUM_OF_ROWS: int = 100  # API 최대값

    # 영문 제품명 → 한글 번역 (OpenAI 호환 엔드포인트)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    TRANSLATE_MODEL: str = "gpt-4o-mini"
    TRANSLATE_BATCH_SIZE: int = 50
    USE_TRANSLATION: bool = False

    # 로깅
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # 추가 환경변수 무시


settings = Settings()
