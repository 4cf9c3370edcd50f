"""Data models for the cover letter pipeline."""

from cover_letter.models.job import DEFAULT_COMPANY, DEFAULT_ROLE, ExtractedJobInfo
from cover_letter.models.message import Message, Role
from cover_letter.models.profile import ExperienceEntry, ProjectEntry, ResumeProfile

__all__ = [
    "DEFAULT_COMPANY",
    "DEFAULT_ROLE",
    "ExperienceEntry",
    "ExtractedJobInfo",
    "Message",
    "ProjectEntry",
    "ResumeProfile",
    "Role",
]
