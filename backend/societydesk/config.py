"""
Configuration settings for SocietyDesk backend
"""

from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    APP_NAME: str = "SocietyDesk API"

    # API Settings
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # Visitor passes
    VISITOR_PASS_VALIDITY_HOURS: int = 24

    # Occupancy rate thresholds (fraction of capacity)
    OCCUPANCY_BUSY_THRESHOLD: float = 0.70
    OCCUPANCY_FULL_THRESHOLD: float = 0.90

    # Load the complex's amenities on startup
    SEED_SAMPLE_DATA: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
