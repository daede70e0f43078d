"""
Application settings for the REST client backend.

Values are read from the environment (prefix ``REST_CLIENT_``) or a local
``.env`` file.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "REST Client"
    APP_VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite:///./rest-client.db"
    # Directory holding the collections/environments JSON documents
    DATA_DIR: str = "./data"

    REQUEST_TIMEOUT: float = 30.0

    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False

    HOST: str = "127.0.0.1"
    PORT: int = 8000

    model_config = {"env_prefix": "REST_CLIENT_", "env_file": ".env", "extra": "ignore"}

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
