"""Pydantic models for application configuration settings."""

from pydantic import BaseModel, Field


class SettingsRead(BaseModel):
    site_name: str
    default_passing_score: int
    public_registration_disabled: bool


class SettingsUpdate(BaseModel):
    site_name: str | None = None
    default_passing_score: int | None = Field(default=None, ge=0, le=100)
    public_registration_disabled: bool | None = None
