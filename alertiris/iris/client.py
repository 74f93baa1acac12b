"""IRIS alerts API client — create, update and delete remote cases."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from alertiris.config import IrisSettings
from alertiris.iris.models import CaseCreate, CaseCreated, CaseUpdate, IrisResponse
from alertiris.telemetry.metrics import iris_requests_total

logger = logging.getLogger("alertiris.iris")


class IrisError(Exception):
    """A remote call failed: transport, HTTP status, body, or application envelope."""

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"iris {operation}: {message}")
        self.operation = operation
        self.status_code = status_code


class IrisClient:
    def __init__(self, cfg: IrisSettings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._http = httpx.AsyncClient(
            base_url=cfg.url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {cfg.api_key}",
                "Content-Type": "application/json",
            },
            verify=not cfg.skip_tls_verify,
            timeout=cfg.timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def create_case(self, case: CaseCreate, cid: int) -> int:
        """Create a case and return its remote alert ID."""
        resp = await self._post("create", "/alerts/add", cid, case.body())
        try:
            return CaseCreated.model_validate(resp.data).alert_id
        except ValidationError as exc:
            raise IrisError("create", f"unexpected response data: {resp.data!r}") from exc

    async def update_case(self, case_id: int, update: CaseUpdate, cid: int) -> None:
        await self._post("update", f"/alerts/update/{case_id}", cid, update.body())

    async def delete_case(self, case_id: int, cid: int) -> None:
        await self._post("delete", f"/alerts/delete/{case_id}", cid, None)

    async def _post(self, operation: str, path: str, cid: int, body: dict | None) -> IrisResponse:
        try:
            resp = await self._http.post(path, params={"cid": cid}, json=body)
        except httpx.HTTPError as exc:
            iris_requests_total.labels(operation=operation, result="transport_error").inc()
            raise IrisError(operation, f"POST {path}: {exc}") from exc

        if not resp.is_success:
            iris_requests_total.labels(operation=operation, result="http_error").inc()
            raise IrisError(
                operation,
                f"POST {path} returned {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )

        try:
            envelope = IrisResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            iris_requests_total.labels(operation=operation, result="bad_response").inc()
            raise IrisError(operation, "unparsable response body", status_code=resp.status_code) from exc

        if envelope.status != "success":
            iris_requests_total.labels(operation=operation, result="api_error").inc()
            raise IrisError(operation, f"api error: {envelope.message}", status_code=resp.status_code)

        iris_requests_total.labels(operation=operation, result="success").inc()
        logger.debug("IRIS %s ok: path=%s cid=%d", operation, path, cid)
        return envelope
