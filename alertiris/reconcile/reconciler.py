"""Alert lifecycle reconciliation — keep one IRIS case per open Alertmanager alert episode.

Per fingerprint there are two states, read from the fingerprint index:

    untracked  --firing-->   create case, store mapping      --> tracked(id)
    tracked    --firing-->   partial update of the case      --> tracked(id)
    tracked    --resolved--> set resolved status, or delete  --> untracked
    untracked  --resolved--> nothing to do                   --> untracked

The remote call always completes before the index is touched, so a failed call leaves the
index exactly as it was.
"""

from __future__ import annotations

import logging
from enum import Enum

from alertiris.config import AlertSettings, ResolvedAction
from alertiris.ingestion.models import AlertStatus, RawAlert
from alertiris.iris.client import IrisClient, IrisError
from alertiris.iris.models import CaseCreate, CaseUpdate
from alertiris.reconcile.mapping import description_for, severity_for
from alertiris.store.fingerprints import FingerprintIndex, FingerprintStoreError

logger = logging.getLogger("alertiris.reconcile")


class Outcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    RESOLVED = "resolved"
    DELETED = "deleted"
    SKIPPED = "skipped"


class ReconcileError(Exception):
    """One alert could not be reconciled; the cause is chained."""

    def __init__(self, message: str, fingerprint: str, case_id: int | None = None) -> None:
        super().__init__(message)
        self.fingerprint = fingerprint
        self.case_id = case_id


class AlertReconciler:
    def __init__(self, iris: IrisClient, index: FingerprintIndex, cfg: AlertSettings) -> None:
        self._iris = iris
        self._index = index
        self._cfg = cfg

    async def reconcile(self, alert: RawAlert, customer_id: int | None = None) -> Outcome:
        """Apply one alert notification to IRIS and the fingerprint index."""
        fp = alert.fingerprint
        cid = self._cfg.customer_id if customer_id is None else customer_id

        try:
            case_id = await self._index.lookup(fp)
        except FingerprintStoreError as exc:
            raise ReconcileError(f"index lookup: {exc}", fp) from exc

        if alert.status == AlertStatus.FIRING:
            if case_id is None:
                return await self._create(alert, cid)
            return await self._update(case_id, alert, cid)

        if alert.status == AlertStatus.RESOLVED:
            if case_id is None:
                logger.warning("Resolved alert not tracked, skipping: fingerprint=%s", fp)
                return Outcome.SKIPPED
            return await self._resolve(case_id, alert, cid)

        logger.warning("Unknown alert status, skipping: status=%r fingerprint=%s", alert.status, fp)
        return Outcome.SKIPPED

    async def _create(self, alert: RawAlert, cid: int) -> Outcome:
        fp = alert.fingerprint
        case = CaseCreate(
            alert_title=alert.name or "unknown",
            alert_description=description_for(alert),
            alert_source=self._cfg.source,
            alert_source_ref=fp,
            alert_source_link=alert.generator_url,
            alert_source_event_time=alert.starts_at,
            alert_source_content=alert.source_content(),
            alert_severity_id=severity_for(alert, self._cfg),
            alert_status_id=self._cfg.status_id_new,
            alert_customer_id=cid,
            alert_classification_id=self._cfg.classification_id,
            alert_tags=alert.name,
        )

        try:
            case_id = await self._iris.create_case(case, cid)
        except IrisError as exc:
            raise ReconcileError(f"create case: {exc}", fp) from exc

        try:
            await self._index.store(fp, case_id)
        except FingerprintStoreError as exc:
            logger.error(
                "Case created but mapping not stored, case is orphaned: fingerprint=%s case_id=%d",
                fp, case_id,
            )
            raise ReconcileError(f"store mapping: {exc}", fp, case_id) from exc

        logger.info("Created IRIS case: fingerprint=%s case_id=%d cid=%d", fp, case_id, cid)
        return Outcome.CREATED

    async def _update(self, case_id: int, alert: RawAlert, cid: int) -> Outcome:
        fp = alert.fingerprint
        update = CaseUpdate(
            alert_description=description_for(alert),
            alert_source_event_time=alert.starts_at,
            alert_source_content=alert.source_content(),
            alert_severity_id=severity_for(alert, self._cfg),
            alert_tags=alert.name,
        )

        try:
            await self._iris.update_case(case_id, update, cid)
        except IrisError as exc:
            raise ReconcileError(f"update case {case_id}: {exc}", fp, case_id) from exc

        logger.info("Updated IRIS case: fingerprint=%s case_id=%d", fp, case_id)
        return Outcome.UPDATED

    async def _resolve(self, case_id: int, alert: RawAlert, cid: int) -> Outcome:
        fp = alert.fingerprint

        if self._cfg.resolved_action == ResolvedAction.DELETE:
            try:
                await self._iris.delete_case(case_id, cid)
            except IrisError as exc:
                raise ReconcileError(f"delete case {case_id}: {exc}", fp, case_id) from exc
            outcome = Outcome.DELETED
        else:
            update = CaseUpdate(alert_status_id=self._cfg.status_id_resolved)
            try:
                await self._iris.update_case(case_id, update, cid)
            except IrisError as exc:
                raise ReconcileError(f"resolve case {case_id}: {exc}", fp, case_id) from exc
            outcome = Outcome.RESOLVED

        try:
            await self._index.delete(fp)
        except FingerprintStoreError as exc:
            logger.error(
                "Case %s but mapping not removed: fingerprint=%s case_id=%d",
                outcome.value, fp, case_id,
            )
            raise ReconcileError(f"delete mapping: {exc}", fp, case_id) from exc

        logger.info("IRIS case %s: fingerprint=%s case_id=%d", outcome.value, fp, case_id)
        return outcome
