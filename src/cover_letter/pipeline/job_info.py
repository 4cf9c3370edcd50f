"""Best-effort extraction of company and role from a job posting."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from cover_letter.errors import CoverLetterError
from cover_letter.models.job import ExtractedJobInfo
from cover_letter.pipeline.base import PromptStage
from cover_letter.utils.json_parser import extract_json, strip_code_fences

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """\
Extract the company name and job title from this job description.

Job Description:
{job_text}

Return ONLY valid JSON in this exact format:
{{"company": "CompanyName", "role": "JobTitle"}}

Rules:
- If company is not mentioned, use "Company"
- Keep names short and filesystem-safe (alphanumeric only)
- No special characters except underscores"""


class _RawJobInfo(BaseModel):
    company: str | None = None
    role: str | None = None


class JobInfoExtractor(PromptStage):
    temperature = 0.1

    async def extract(self, job_text: str, credential: str) -> ExtractedJobInfo:
        """Return sanitized company/role, or the fallback pair on any failure."""
        try:
            text = await self._complete(EXTRACTION_PROMPT.format(job_text=job_text), credential)
            raw = _RawJobInfo.model_validate(extract_json(strip_code_fences(text)))
        except (CoverLetterError, ValueError) as e:
            logger.warning("Job info extraction failed, using defaults: %s", e)
            return ExtractedJobInfo.fallback()
        info = ExtractedJobInfo.from_raw(raw.company, raw.role)
        logger.debug("Extracted job info: %s / %s", info.company, info.role)
        return info
