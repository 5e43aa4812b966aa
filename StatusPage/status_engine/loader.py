"""
Loads a status input document (services, incidents, groups) from JSON.

The persistence layer lives elsewhere; this is how the CLI and the
``GET /status`` route get a snapshot of its data.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from status_engine.models import Incident, Service, ServiceGroup

logger = logging.getLogger(__name__)


class SnapshotLoadError(Exception):
    """Raised when a status input file cannot be read or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StatusInput(BaseModel):
    """Everything the engine needs for one computation."""
    services: list[Service] = Field(default_factory=list)
    incidents: list[Incident] = Field(default_factory=list)
    groups: list[ServiceGroup] = Field(default_factory=list)


def load_status_input(path: Path | str) -> StatusInput:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotLoadError(path, f"cannot read file ({exc.strerror or exc})") from exc

    try:
        data = StatusInput.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotLoadError(
            path, f"invalid status input ({exc.error_count()} errors)"
        ) from exc

    logger.debug(
        "Loaded %s: %d services, %d incidents, %d groups",
        path,
        len(data.services),
        len(data.incidents),
        len(data.groups),
    )
    return data
