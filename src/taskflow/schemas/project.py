"""Project schemas for API request/response."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def clean_description(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


def check_color(v: str | None) -> str | None:
    if v is not None and not HEX_COLOR.match(v):
        raise ValueError("Color must be a hex value like #3B82F6")
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project. Color falls back to the configured default."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return clean_description(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        return check_color(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    color: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return clean_description(v)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        return check_color(v)


class ProjectRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    color: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectWithStats(ProjectRead):
    task_count: int = 0
