"""Metadata API request model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..config import WILDCARD_MEMBER


class MetadataRequest(BaseModel):
    """Members of one metadata type to read.

    ``members`` may contain the wildcard ``"*"``, meaning every member of the
    type. Reading is destructive: the wildcard is replaced in place by the
    listed member names, then members are drained in read-sized chunks, so the
    list is empty once the read completes.
    """

    type: str = Field(..., min_length=1)
    members: list[str] = Field(default_factory=list)

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD_MEMBER in self.members
