"""Alertmanager webhook receiver — reconciles each alert in the batch against IRIS."""

from __future__ import annotations

import logging
from collections import Counter

from fastapi import APIRouter, Depends, Request

from alertiris.config import AlertSettings
from alertiris.ingestion.models import AlertmanagerPayload
from alertiris.reconcile.reconciler import AlertReconciler
from alertiris.telemetry.metrics import alerts_total

logger = logging.getLogger("alertiris.ingestion")
router = APIRouter(tags=["ingestion"])


def get_reconciler(request: Request) -> AlertReconciler:
    return request.app.state.reconciler


def get_alert_settings(request: Request) -> AlertSettings:
    return request.app.state.settings.alerts


@router.post("/webhook")
async def alertmanager_webhook(
    payload: AlertmanagerPayload,
    reconciler: AlertReconciler = Depends(get_reconciler),
    alert_cfg: AlertSettings = Depends(get_alert_settings),
):
    """Receive an Alertmanager webhook and reconcile its alerts one at a time.

    Per-alert failures are logged and counted; the sender always gets 200 once the
    payload has decoded.
    """
    customer_id = alert_cfg.customer_for(payload.receiver)
    logger.info(
        "Received %d alerts: receiver=%s status=%s group_key=%s",
        len(payload.alerts), payload.receiver, payload.status, payload.group_key,
    )

    outcomes: Counter[str] = Counter()
    for alert in payload.alerts:
        try:
            outcome = (await reconciler.reconcile(alert, customer_id)).value
        except Exception:
            logger.exception("Failed to process alert: fingerprint=%s", alert.fingerprint)
            outcome = "failed"
        outcomes[outcome] += 1
        alerts_total.labels(outcome=outcome).inc()

    return {"received": len(payload.alerts), "outcomes": dict(outcomes)}
