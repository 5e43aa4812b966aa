"""
Application configuration via Pydantic Settings.

Every field can be overridden with an ``SAE_``-prefixed environment
variable, e.g. ``SAE_DATA_FILE=/srv/status.json``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from status_engine.engine import IMMINENT_MAINTENANCE_STATUSES
from status_engine.models import IncidentLifecycleStatus


class EngineSettings(BaseSettings):
    """Application-wide settings, overridable via environment variables."""

    app_name: str = "Status Aggregation Engine"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    data_file: Optional[Path] = None  # JSON status input served by GET /status
    acknowledged_maintenance_is_imminent: bool = True

    model_config = {"env_prefix": "SAE_"}

    @property
    def imminent_maintenance_statuses(self) -> frozenset[IncidentLifecycleStatus]:
        if self.acknowledged_maintenance_is_imminent:
            return IMMINENT_MAINTENANCE_STATUSES
        return IMMINENT_MAINTENANCE_STATUSES - {IncidentLifecycleStatus.ACKNOWLEDGED}


settings = EngineSettings()
