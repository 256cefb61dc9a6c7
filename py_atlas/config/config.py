from pathlib import Path
from typing import List

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")
    allowed_origins: str = Field(default="http://localhost:3000", description="CORS allowed origins")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (e.g., plain, json)")

    # World canvas
    world_width: float = Field(default=1000, gt=0, description="Logical world canvas width")
    world_height: float = Field(default=600, gt=0, description="Logical world canvas height")

    # Viewport Configuration
    min_viewport_dim: float = Field(default=200, gt=0, description="Smallest visible width/height in world units")
    max_viewport_multiplier: float = Field(default=3, gt=0, description="Largest visible size as a multiple of world width")
    wheel_zoom_out_factor: float = Field(default=1.1, description="Scale factor per wheel step away from the user")
    wheel_zoom_in_factor: float = Field(default=0.9, description="Scale factor per wheel step towards the user")
    button_zoom_in_factor: float = Field(default=0.8, description="Scale factor of the zoom-in control")
    button_zoom_out_factor: float = Field(default=1.25, description="Scale factor of the zoom-out control")
    screen_width: float = Field(default=1000, gt=0, description="Default drawing surface width in pixels")
    screen_height: float = Field(default=600, gt=0, description="Default drawing surface height in pixels")

    # Sessions
    max_viewport_sessions: int = Field(default=1000, description="Max concurrent viewport sessions")

    @property
    def origins(self) -> List[str]:
        """Split the comma separated CORS origins."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "ATLAS_"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
