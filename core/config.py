"""Runtime configuration for the DSR generator.

Settings come from ``DSR_*`` and ``TEMPORAL_*`` environment variables,
with a ``.env`` file at the repo root read as a fallback so local
development needs no exports. Blank variables are treated as unset.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


REPO_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Process-wide settings.

    Attributes:
        data_dir: Root of the flat-file data (shows.csv, equipment.csv, ...)
        template_name: File name of the DSR template inside templates/
        layout_path: Optional external layout descriptor (JSON)
        log_level: Logging level name
        log_json: Emit JSON log lines instead of human-readable ones
        task_queue: Temporal task queue polled by the worker
        sweep_interval_minutes: Interval for the scheduled regeneration sweep
        temporal_endpoint: Temporal frontend host:port
        temporal_namespace: Temporal namespace
        temporal_api_key: API key for Temporal Cloud (enables TLS)
    """

    model_config = SettingsConfigDict(
        env_prefix="DSR_",
        env_file=REPO_ROOT / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    data_dir: Path = REPO_ROOT / "data"
    template_name: str = "dsr_template.pdf"
    layout_path: Optional[Path] = None
    log_level: str = "INFO"
    log_json: bool = False
    task_queue: str = "dsr-default"
    sweep_interval_minutes: int = Field(default=15, ge=1)

    # Shared with the Temporal tooling, so no DSR_ prefix
    temporal_endpoint: str = Field(default="localhost:7233", validation_alias="TEMPORAL_ENDPOINT")
    temporal_namespace: str = Field(default="default", validation_alias="TEMPORAL_NAMESPACE")
    temporal_api_key: Optional[str] = Field(default=None, validation_alias="TEMPORAL_API_KEY")

    @property
    def shows_csv(self) -> Path:
        return self.data_dir / "shows.csv"

    @property
    def equipment_csv(self) -> Path:
        return self.data_dir / "equipment.csv"

    @property
    def templates_dir(self) -> Path:
        return self.data_dir / "templates"

    @property
    def shows_dir(self) -> Path:
        return self.data_dir / "shows"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (built on first use)."""
    return Settings()
