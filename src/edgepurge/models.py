from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Zone(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str


class PurgeOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    succeeded: bool
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "PurgeOutcome":
        return cls(succeeded=True, message=message)

    @classmethod
    def failure(cls, message: str) -> "PurgeOutcome":
        return cls(succeeded=False, message=message)


class SslStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: str


class ApiEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    result: Any = None
    result_info: Optional[dict[str, Any]] = None
    errors: List[dict[str, Any]] = Field(default_factory=list)
    messages: List[dict[str, Any]] = Field(default_factory=list)


class PurgeEverythingRequest(BaseModel):
    domain: str


class PurgePagesRequest(BaseModel):
    urls: List[str]

    @model_validator(mode="after")
    def validate_urls(self) -> "PurgePagesRequest":
        if not self.urls:
            raise ValueError("urls must contain at least one url")
        return self


class PurgeResponse(BaseModel):
    results: List[PurgeOutcome]
    summary: str


class ZoneListResponse(BaseModel):
    zones: List[Zone]


class SslStatusResponse(BaseModel):
    zone_id: str
    enabled: bool
