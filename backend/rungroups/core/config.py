"""
Application configuration.
Grouping defaults and logging options loaded from environment variables.
"""
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Distance grouping: 1 mile buckets, quarter mile either side
    DISTANCE_TOLERANCE: float = 0.25
    DISTANCE_GROUP_SIZE: float = 1.0

    # Pace grouping: whole minute buckets, 30 seconds either side
    PACE_TOLERANCE: float = 0.5
    PACE_GROUP_SIZE: float = 1.0

    # Altitude grouping: 100 m buckets of elevation gain
    ALTITUDE_TOLERANCE: float = 50.0
    ALTITUDE_GROUP_SIZE: float = 100.0

    # Unit used when a workout arrives without one
    DEFAULT_DISTANCE_UNIT: str = "mi"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    def get_grouping_defaults(self, group_type: str) -> tuple[float, float]:
        """Get (tolerance, group_size) for a grouping dimension."""
        defaults = {
            "distance": (self.DISTANCE_TOLERANCE, self.DISTANCE_GROUP_SIZE),
            "pace": (self.PACE_TOLERANCE, self.PACE_GROUP_SIZE),
            "altitude": (self.ALTITUDE_TOLERANCE, self.ALTITUDE_GROUP_SIZE),
        }
        # Unknown dimensions group by distance
        return defaults.get(group_type.lower(), defaults["distance"])

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
