import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Suppresses interactive notifications; conditions only reach the log
    # and the collected report.
    TEST_MODE: bool = False
    LOG_LEVEL: str = "INFO"

    INPUT_ENCODING: str = "utf-8"
    # Matching is quadratic in employees; this keeps a request to a few
    # thousand rows.
    MAX_UPLOAD_SIZE: int = 64 * 1024

    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
    ]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
