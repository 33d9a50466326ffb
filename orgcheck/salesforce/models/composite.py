"""Composite API request and response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config import COMPOSITE_BATCH_SIZE


class CompositeSubRequest(BaseModel):
    """A single sub-request of a composite call."""

    url: str
    method: str = "GET"
    reference_id: str = Field(..., alias="referenceId")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CompositeBatch(BaseModel):
    """Body of one composite call."""

    sub_requests: list[CompositeSubRequest] = Field(
        ..., min_length=1, max_length=COMPOSITE_BATCH_SIZE
    )
    all_or_none: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def ids(self) -> list[str]:
        return [sub_request.reference_id for sub_request in self.sub_requests]

    def to_payload(self) -> dict[str, Any]:
        return {
            "allOrNone": self.all_or_none,
            "compositeRequest": [
                sub_request.model_dump(by_alias=True) for sub_request in self.sub_requests
            ],
        }


class CompositeSubResponse(BaseModel):
    """Individually statused response of one sub-request."""

    http_status_code: int = Field(..., alias="httpStatusCode")
    body: Any = None
    reference_id: str | None = Field(default=None, alias="referenceId")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def ok(self) -> bool:
        return self.http_status_code == 200

    @property
    def error_code(self) -> str | None:
        """Error code of a failed sub-request (``body[0].errorCode``), if readable."""
        if isinstance(self.body, list) and self.body and isinstance(self.body[0], dict):
            return self.body[0].get("errorCode")
        return None
