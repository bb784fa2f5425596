from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .urls import normalize_domain


class ZoneConfig(BaseModel):
    id: str
    name: str

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return normalize_domain(value)


class CloudflareConfig(BaseModel):
    api_base_url: str = "https://api.cloudflare.com/client/v4"
    api_token: Optional[str] = None
    email: Optional[str] = None
    api_key: Optional[str] = None
    timeout_s: float = Field(default=15.0, gt=0)
    purge_batch_size: int = Field(default=30, ge=1)
    zones_per_page: int = Field(default=50, ge=5, le=50)

    def with_env_credentials(self) -> "CloudflareConfig":
        return self.model_copy(
            update={
                "api_token": self.api_token or os.getenv("CLOUDFLARE_API_TOKEN"),
                "email": self.email or os.getenv("CLOUDFLARE_EMAIL"),
                "api_key": self.api_key or os.getenv("CLOUDFLARE_API_KEY"),
            }
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_token or (self.email and self.api_key))


class Settings(BaseModel):
    purge_enabled: bool = True
    allowed_zones: list[ZoneConfig] = Field(default_factory=list)
    allowed_domains: list[str] = Field(default_factory=list)
    cloudflare: CloudflareConfig = Field(default_factory=CloudflareConfig)

    @model_validator(mode="after")
    def default_domains_to_zones(self) -> "Settings":
        if not self.allowed_domains:
            self.allowed_domains = [zone.name for zone in self.allowed_zones]
        return self


def load_config(path: Optional[str] = None) -> Settings:
    if not path:
        return Settings()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return Settings()
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    return Settings(**data)
