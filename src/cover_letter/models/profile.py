"""Pydantic models for a parsed resume."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ExperienceEntry(BaseModel):
    title: str
    company: str
    duration: str = ""
    description: str | None = None


class ProjectEntry(BaseModel):
    name: str
    description: str | None = None
    technologies: str | None = None


class ResumeProfile(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    education: str | None = None
    skills: str | None = None
    experience: list[ExperienceEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    summary: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value.strip()

    @field_validator("skills", "education", mode="before")
    @classmethod
    def _join_lists(cls, value):
        # Models sometimes answer with a JSON list where a string was asked for
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return value

    @field_validator("experience", "projects", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value
