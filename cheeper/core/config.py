from typing import List, Optional, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    # Application
    APP_NAME: str = "Cheeper"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./cheeper.db"

    # Test data
    TEST_MESSAGES_PER_BATCH: int = 10

    # Benchmark
    BENCHMARK_SEED_LOGIN: str = "login_0"
    BENCHMARK_MESSAGE_ID: Optional[str] = None
    BENCHMARK_REQUEST_COUNTS: Union[List[int], str] = [100, 1000, 10000]

    @field_validator("BENCHMARK_REQUEST_COUNTS", mode="before")
    @classmethod
    def assemble_request_counts(cls, v: Union[str, List[int]]) -> Union[List[int], str]:
        if isinstance(v, str) and v.startswith("["):
            return json.loads(v)
        elif isinstance(v, str):
            return [int(i.strip()) for i in v.split(",") if i.strip()]
        return v


settings = Settings()
