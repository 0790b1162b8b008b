from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseModel):
    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )


class Settings(BaseSettings):
    # If you have a URL serving candidate rows (JSON list or GeoJSON), put it here.
    # Otherwise candidates are loaded from the local cache file below.
    candidate_source_url: str | None = None

    # Local cache path (CSV/GeoJSON/JSON)
    candidate_cache_path: str = "data/parking_spots.geojson"

    default_radius_m: int = Field(500, gt=0, description="Search radius when the caller sends none")
    http_timeout_s: float = Field(10.0, gt=0, description="Timeout for the HTTP candidate store")

    # Seeds every request's random source; leave unset for live traffic simulation.
    random_seed: int | None = None

    history_size: int = Field(50, gt=0, description="Search history entries kept in memory")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="PARKRANK_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
