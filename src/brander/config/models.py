"""Pydantic models representing the raw Brander configuration file."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RepositoryInfo(BaseModel):
    """Where the project is hosted, used to build links to documents and assets."""

    type: str | None = Field(default=None, description="Repository type. Only git is understood.")
    url: str | None = Field(default=None, description="Clone or browse URL of the repository.")

    @field_validator("type", "url", mode="before")
    @classmethod
    def strip_value(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class ConfigData(BaseModel):
    """Top-level configuration payload.

    ``tasks`` and ``docs`` are kept loosely typed: each entry is validated by its parser at
    generation time so that errors can name the offending entry.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    name: str | None = Field(default=None, description="Project name. Defaults to package metadata.")
    title: str | None = Field(default=None, description="Display title. Defaults to the name.")
    email: str | None = None
    homepage: str | None = None
    repository: RepositoryInfo | None = None
    options: dict[str, Any] = Field(default_factory=dict, description="Global options read via Config.option.")
    tasks: list[Any] = Field(default_factory=list, description="Asset generation tasks.")
    docs: list[Any] = Field(default_factory=list, description="Documentation trees.")

    @field_validator("repository", mode="before")
    @classmethod
    def coerce_repository(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"url": value}
        return value

    @field_validator("options", mode="before")
    @classmethod
    def default_options(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("tasks", "docs", mode="before")
    @classmethod
    def default_list(cls, value: Any) -> Any:
        return [] if value is None else value
