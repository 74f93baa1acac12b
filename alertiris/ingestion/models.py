"""Alertmanager webhook payload models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AlertStatus(str, Enum):
    FIRING = "firing"
    RESOLVED = "resolved"


class RawAlert(BaseModel):
    """Alertmanager webhook payload for a single alert.

    Unknown keys are kept so the alert can be forwarded verbatim as case content.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: str = ""
    labels: dict[str, str] = {}
    annotations: dict[str, str] = {}
    starts_at: str = Field(alias="startsAt", default="")
    ends_at: str = Field(alias="endsAt", default="")
    generator_url: str = Field(alias="generatorURL", default="")
    fingerprint: str = ""

    @property
    def name(self) -> str:
        return self.labels.get("alertname", "")

    def source_content(self) -> dict[str, Any]:
        """The alert as Alertmanager sent it, for the remote audit trail."""
        return self.model_dump(mode="json", by_alias=True)


class AlertmanagerPayload(BaseModel):
    """Full Alertmanager webhook payload."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "4"
    group_key: str = Field(alias="groupKey", default="")
    truncated_alerts: int = Field(alias="truncatedAlerts", default=0)
    status: str = ""
    receiver: str = ""
    group_labels: dict[str, str] = Field(alias="groupLabels", default={})
    common_labels: dict[str, str] = Field(alias="commonLabels", default={})
    common_annotations: dict[str, str] = Field(alias="commonAnnotations", default={})
    external_url: str = Field(alias="externalURL", default="")
    alerts: list[RawAlert] = []
