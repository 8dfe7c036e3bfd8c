"""KeywordProfit - Application configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="KEYWORD_PROFIT_", extra="forbid",
    )

    # Scoring
    top_recommendations: int = Field(
        default=10, ge=1, description="Keywords listed in the summary top slice",
    )

    # Storage
    write_reports: bool = Field(
        default=False, description="Write every analysis to output_dir",
    )
    output_dir: Path = Field(
        default=Path("./outputs"), description="Local output directory",
    )

    # Monitoring
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[Path] = Field(
        default=None, description="Directory for the rotating log file; stderr only when unset",
    )
