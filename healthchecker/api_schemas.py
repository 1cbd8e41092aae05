from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Status = Literal["UP", "DOWN"]


class ServiceStatusResponse(BaseModel):
    url: str
    status: Status
    code: int = Field(ge=0, description="HTTP status code, 0 when no response was received")
    last_checked: str = Field(alias="lastChecked")
    error: str | None = Field(
        default=None,
        description="Failure classification, only present when the probe raised",
    )
    model_config = ConfigDict(populate_by_name=True)


class HealthReportResponse(BaseModel):
    status: Status
    services: list[ServiceStatusResponse]
