"""
Unit Tests for alertiris/reconcile/mapping.py

Severity lookup and description line selection/ordering.
"""

from alertiris.config import AlertSettings
from alertiris.ingestion.models import RawAlert
from alertiris.reconcile.mapping import description_for, severity_for


def _alert(labels=None, annotations=None, **fields) -> RawAlert:
    return RawAlert(labels=labels or {}, annotations=annotations or {}, **fields)


class TestSeverityFor:
    """Test suite for severity_for."""

    def test_mapped_severity(self, alert_settings):
        alert = _alert({"alertname": "X", "severity": "critical"})
        assert severity_for(alert, alert_settings) == 6

    def test_unmapped_severity_uses_default(self, alert_settings):
        alert = _alert({"alertname": "X", "severity": "page-everyone"})
        assert severity_for(alert, alert_settings) == 4

    def test_missing_severity_uses_default(self):
        cfg = AlertSettings(default_severity_id=3, severity_map={"critical": 6})
        assert severity_for(_alert({"alertname": "X"}), cfg) == 3

    def test_empty_map_always_default(self):
        cfg = AlertSettings(default_severity_id=5)
        assert severity_for(_alert({"severity": "critical"}), cfg) == 5


class TestDescriptionFor:
    """Test suite for description_for."""

    def test_name_and_severity_only(self):
        alert = _alert({"alertname": "X", "severity": "warning"})
        assert description_for(alert) == "Alert: X\nSeverity: warning"

    def test_empty_alert_yields_empty_string(self):
        assert description_for(_alert()) == ""

    def test_empty_values_are_omitted(self):
        alert = _alert(
            {"alertname": "X", "severity": "", "hostname": ""},
            {"summary": "disk almost full", "description": ""},
        )
        assert description_for(alert) == "Alert: X\nSummary: disk almost full"

    def test_full_field_order(self):
        alert = _alert(
            {
                "tier": "backend",
                "group": "storage",
                "service": "postgres",
                "instance_name": "db-01",
                "hostname": "db-01.internal",
                "severity": "critical",
                "alertname": "DiskFull",
                "unrelated": "ignored",
            },
            {
                "load": "0.93",
                "summary": "Disk is full",
                "description": "/var is at 99%",
            },
            startsAt="2025-12-10T10:00:00Z",
            fingerprint="abc123",
            generatorURL="http://prometheus/graph",
        )

        assert description_for(alert).split("\n") == [
            "Alert: DiskFull",
            "Severity: critical",
            "Description: /var is at 99%",
            "Summary: Disk is full",
            "Hostname: db-01.internal",
            "Instance: db-01",
            "Service: postgres",
            "Group: storage",
            "Tier: backend",
            "Load: 0.93",
            "Started At: 2025-12-10T10:00:00Z",
            "Fingerprint: abc123",
            "Generator URL: http://prometheus/graph",
        ]

    def test_instance_falls_back_to_instance_label(self):
        alert = _alert({"instance": "10.0.0.5:9100"})
        assert description_for(alert) == "Instance: 10.0.0.5:9100"

    def test_instance_name_wins_over_instance(self):
        alert = _alert({"instance": "10.0.0.5:9100", "instance_name": "node-a"})
        assert description_for(alert) == "Instance: node-a"

    def test_no_trailing_newline(self, firing_alert):
        text = description_for(firing_alert)
        assert not text.endswith("\n")
        assert "" not in text.split("\n")
