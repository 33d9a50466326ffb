"""Daily API request quota models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import QuotaZone


class ApiUsage(BaseModel):
    """Usage figures reported by the platform after a call."""

    used: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def ratio(self) -> float | None:
        if self.limit <= 0:
            return None
        return self.used / self.limit


class QuotaSnapshot(BaseModel):
    """Read-only view of the watchdog state."""

    ratio: float
    percentage: float
    zone: QuotaZone
    warning_threshold: float
    fatal_threshold: float
    observed_at: float | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_green(self) -> bool:
        return self.zone == QuotaZone.GREEN

    @property
    def is_yellow(self) -> bool:
        return self.zone == QuotaZone.YELLOW

    @property
    def is_red(self) -> bool:
        return self.zone == QuotaZone.RED
