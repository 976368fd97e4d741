from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "GeoHeat"
    PROJECT_DESCRIPTION: str = "Geo point ingestion and density grid aggregation"
    VERSION: str = "0.3.0"
    API_V1_STR: str = "/api/v1"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Density grid
    DEFAULT_GRID_SIZE: int = 20

    # Upload limits
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    class ConfigDict:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
