"""Request and response bodies for the IRIS alerts API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

# Raw alert forwarded as-is; IRIS stores it without interpreting it.
SourceContent = dict[str, Any]


class CaseCreate(BaseModel):
    alert_title: str
    alert_description: str = ""
    alert_source: str = ""
    alert_source_ref: str = ""
    alert_source_link: str = ""
    alert_source_event_time: str = ""
    alert_source_content: SourceContent | None = None
    alert_severity_id: int
    alert_status_id: int
    alert_customer_id: int
    alert_classification_id: int | None = None
    alert_note: str = ""
    alert_tags: str = ""

    def body(self) -> dict[str, Any]:
        # Optional references are dropped when empty; note, ids and title always go out.
        data = self.model_dump(mode="json")
        for key in (
            "alert_description",
            "alert_source",
            "alert_source_ref",
            "alert_source_link",
            "alert_source_event_time",
            "alert_source_content",
            "alert_classification_id",
            "alert_tags",
        ):
            if not data.get(key):
                data.pop(key, None)
        return data


class CaseUpdate(BaseModel):
    """Partial update: only fields that were explicitly set are sent."""

    alert_title: str | None = None
    alert_description: str | None = None
    alert_source: str | None = None
    alert_source_ref: str | None = None
    alert_source_link: str | None = None
    alert_source_event_time: str | None = None
    alert_source_content: SourceContent | None = None
    alert_severity_id: int | None = None
    alert_status_id: int | None = None
    alert_customer_id: int | None = None
    alert_classification_id: int | None = None
    alert_tags: str | None = None

    def body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class IrisResponse(BaseModel):
    status: str = ""
    message: str = ""
    data: Any = None


class CaseCreated(BaseModel):
    alert_id: int
