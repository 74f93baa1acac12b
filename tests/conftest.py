"""
Pytest Configuration and Shared Fixtures

- Alertmanager alert and payload builders
- Recording fake for the IRIS client
- Fingerprint index backed by fakeredis, plus an in-memory index for sync tests
"""

from typing import Any, Dict

import fakeredis
import pytest

from alertiris.config import AlertSettings, ResolvedAction
from alertiris.ingestion.models import RawAlert
from alertiris.iris.client import IrisError
from alertiris.store.fingerprints import FingerprintIndex


# ============================================================================
# Alert Fixtures
# ============================================================================

def make_alert_dict(
    fingerprint: str = "abc123",
    status: str = "firing",
    **labels: str,
) -> Dict[str, Any]:
    return {
        "status": status,
        "labels": {"alertname": "DiskFull", **labels},
        "annotations": {},
        "startsAt": "2025-12-10T10:00:00Z",
        "endsAt": "0001-01-01T00:00:00Z",
        "generatorURL": "http://prometheus:9090/graph?g0.expr=disk",
        "fingerprint": fingerprint,
    }


def make_payload(*alerts: Dict[str, Any], receiver: str = "iris") -> Dict[str, Any]:
    return {
        "version": "4",
        "groupKey": '{}:{alertname="DiskFull"}',
        "truncatedAlerts": 0,
        "status": alerts[0]["status"] if alerts else "firing",
        "receiver": receiver,
        "groupLabels": {"alertname": "DiskFull"},
        "commonLabels": {},
        "commonAnnotations": {},
        "externalURL": "http://alertmanager:9093",
        "alerts": list(alerts),
    }


@pytest.fixture
def firing_alert() -> RawAlert:
    return RawAlert.model_validate(make_alert_dict(severity="critical"))


@pytest.fixture
def resolved_alert() -> RawAlert:
    return RawAlert.model_validate(make_alert_dict(status="resolved", severity="critical"))


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def alert_settings() -> AlertSettings:
    return AlertSettings(
        source="alertmanager",
        customer_id=1,
        status_id_new=2,
        status_id_resolved=6,
        resolved_action=ResolvedAction.UPDATE,
        default_severity_id=4,
        severity_map={"critical": 6, "warning": 4, "info": 2},
    )


@pytest.fixture
def delete_settings(alert_settings) -> AlertSettings:
    return alert_settings.model_copy(update={"resolved_action": ResolvedAction.DELETE})


# ============================================================================
# Fakes
# ============================================================================

class FakeIris:
    """Records every call; ``fail_on`` names an operation that should raise."""

    def __init__(self, first_id: int = 100) -> None:
        self.calls: list[tuple] = []
        self.fail_on: str | None = None
        self._next_id = first_id

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_on == operation:
            raise IrisError(operation, "simulated failure", status_code=500)

    async def create_case(self, case, cid):
        self.calls.append(("create", case, cid))
        self._maybe_fail("create")
        case_id = self._next_id
        self._next_id += 1
        return case_id

    async def update_case(self, case_id, update, cid):
        self.calls.append(("update", case_id, update, cid))
        self._maybe_fail("update")

    async def delete_case(self, case_id, cid):
        self.calls.append(("delete", case_id, cid))
        self._maybe_fail("delete")

    def kinds(self) -> list[str]:
        return [c[0] for c in self.calls]


class MemoryIndex:
    """Dict-backed index with the FingerprintIndex interface."""

    def __init__(self) -> None:
        self.entries: dict[str, int] = {}

    async def lookup(self, fingerprint):
        return self.entries.get(fingerprint)

    async def store(self, fingerprint, case_id):
        self.entries[fingerprint] = case_id

    async def delete(self, fingerprint):
        self.entries.pop(fingerprint, None)

    async def ping(self):
        return True


@pytest.fixture
def fake_iris() -> FakeIris:
    return FakeIris()


@pytest.fixture
def memory_index() -> MemoryIndex:
    return MemoryIndex()


@pytest.fixture
async def redis_client():
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def index(redis_client) -> FingerprintIndex:
    return FingerprintIndex(redis_client, "fp:")


@pytest.fixture
def alert_factory():
    """Factory fixture building raw Alertmanager alert dicts."""
    return make_alert_dict


@pytest.fixture
def payload_factory():
    """Factory fixture wrapping alert dicts in a webhook payload."""
    return make_payload
