"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from labyrinth.core.generators import GENERATOR_NAMES
from labyrinth.solvers import SOLVERS

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Labyrinth"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Base URL the remote solver talks to
    api_url: str = "http://127.0.0.1:8000/v1"

    # Maze generation
    maze_width: int = 15
    maze_height: int = 10
    generator: str = "braid"
    braid_density: float = 4.0  # trials per room
    carve_probability: float = 1.0  # growing-tree chance of a random active room
    placement_max_attempts: int = 10_000

    # Sessions
    max_steps: int = 10_000
    times: int = 10  # sessions per solver run or shootout pairing
    solver: str = "nearest"

    @field_validator("maze_width", "maze_height", "max_steps", "times", "placement_max_attempts")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts and dimensions are at least 1."""
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("braid_density")
    @classmethod
    def validate_density(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("braid_density must be positive")
        return v

    @field_validator("carve_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("carve_probability must be between 0 and 1")
        return v

    @field_validator("generator")
    @classmethod
    def validate_generator(cls, v: str) -> str:
        v = v.lower()
        if v not in GENERATOR_NAMES:
            raise ValueError(
                f"Invalid generator '{v}'. Must be one of: {', '.join(GENERATOR_NAMES)}"
            )
        return v

    @field_validator("solver")
    @classmethod
    def validate_solver(cls, v: str) -> str:
        v = v.lower()
        if v not in SOLVERS:
            raise ValueError(
                f"Invalid solver '{v}'. Must be one of: {', '.join(sorted(SOLVERS))}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
