"""Derive IRIS severity and description text from Alertmanager labels and annotations."""

from __future__ import annotations

from alertiris.config import AlertSettings
from alertiris.ingestion.models import RawAlert


def severity_for(alert: RawAlert, cfg: AlertSettings) -> int:
    severity = alert.labels.get("severity")
    if severity is not None and severity in cfg.severity_map:
        return cfg.severity_map[severity]
    return cfg.default_severity_id


def description_for(alert: RawAlert) -> str:
    """Human-readable case description, one ``Key: value`` line per non-empty field."""
    labels = alert.labels
    annotations = alert.annotations

    fields = [
        ("Alert", labels.get("alertname", "")),
        ("Severity", labels.get("severity", "")),
        ("Description", annotations.get("description", "")),
        ("Summary", annotations.get("summary", "")),
        ("Hostname", labels.get("hostname", "")),
        ("Instance", labels.get("instance_name") or labels.get("instance", "")),
        ("Service", labels.get("service", "")),
        ("Group", labels.get("group", "")),
        ("Tier", labels.get("tier", "")),
        ("Load", annotations.get("load", "")),
        ("Started At", alert.starts_at),
        ("Fingerprint", alert.fingerprint),
        ("Generator URL", alert.generator_url),
    ]
    return "\n".join(f"{key}: {value}" for key, value in fields if value)
