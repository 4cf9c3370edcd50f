"""Company and role extracted from a job posting."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from cover_letter.utils.text import sanitize_token

DEFAULT_COMPANY = "Company"
DEFAULT_ROLE = "Position"


class ExtractedJobInfo(BaseModel):
    """Filesystem-safe company/role tokens; never empty."""

    model_config = ConfigDict(frozen=True)

    company: str = DEFAULT_COMPANY
    role: str = DEFAULT_ROLE

    @classmethod
    def from_raw(cls, company: object, role: object) -> ExtractedJobInfo:
        return cls(
            company=sanitize_token(company, DEFAULT_COMPANY),
            role=sanitize_token(role, DEFAULT_ROLE),
        )

    @classmethod
    def fallback(cls) -> ExtractedJobInfo:
        return cls()
