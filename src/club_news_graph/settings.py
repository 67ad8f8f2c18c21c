from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except Exception as e:  # pragma: no cover
    raise RuntimeError(
        "pydantic-settings is required. Install with: pip install pydantic-settings"
    ) from e


class ClubNewsGraphSettings(BaseSettings):
    """Unified configuration for the club news relevance graph.

    Environment variables are prefixed with CLUB_NEWS_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="CLUB_NEWS_GRAPH_", extra="ignore")

    # --- Core ---
    log_level: str = Field(default="INFO", description="Python logging level")

    # --- Distance ---
    min_edge_weight: float = Field(
        default=0.1, gt=0.0, le=1.0, description="Floor applied to edge weight before inverting to a cost"
    )
    default_weighted: bool = Field(default=True)
    default_max_distance: int = Field(default=2, ge=1)
    bucket_rounding: Literal["ceil", "floor", "round"] = Field(
        default="ceil", description="How fractional weighted distances map to integer levels"
    )

    # --- Validation ---
    require_clubs: bool = Field(default=False, description="Reject metadata that mentions no club")


settings = ClubNewsGraphSettings()


def configure_logging(level: str | None = None) -> None:
    level = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
