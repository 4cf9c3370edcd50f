"""Structured resume extraction with the language model."""

from __future__ import annotations

import logging

from cover_letter.errors import ConfigurationError, CoverLetterError, ResumeParseError
from cover_letter.models.profile import ResumeProfile
from cover_letter.pipeline.base import PromptStage
from cover_letter.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

MIN_RESUME_CHARS = 50

PARSE_PROMPT = """\
Extract structured information from this resume and return ONLY valid JSON.

Resume:
{resume_text}

Return this exact JSON structure (fill in what you find, use null for missing fields):
{{
  "name": "Full Name",
  "email": "email@example.com",
  "phone": "phone number or null",
  "education": "Degree, Major, University, Graduation Year",
  "skills": "Comma-separated list of technical skills",
  "experience": [
    {{
      "company": "Company Name",
      "title": "Job Title",
      "duration": "Date range",
      "description": "Brief description of key achievements"
    }}
  ],
  "projects": [
    {{
      "name": "Project Name",
      "description": "Brief description",
      "technologies": "Technologies used"
    }}
  ],
  "summary": "2-3 sentence professional summary"
}}

Return ONLY the JSON, no markdown, no explanation."""


class ResumeParser(PromptStage):
    temperature = 0.1

    async def parse(self, resume_text: str, credential: str) -> ResumeProfile:
        """Turn raw resume text into a ``ResumeProfile``."""
        if len(resume_text.strip()) < MIN_RESUME_CHARS:
            raise ConfigurationError(
                "Resume text is too short. Please provide a complete resume."
            )
        try:
            text = await self._complete(PARSE_PROMPT.format(resume_text=resume_text), credential)
            data = extract_json(text)
            if not isinstance(data, dict):
                raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
            profile = ResumeProfile.model_validate(data)
        except (CoverLetterError, ValueError) as e:
            raise ResumeParseError(f"Failed to parse resume: {e}") from e
        logger.info(
            "Parsed resume for %s: %d experience, %d project entries",
            profile.name,
            len(profile.experience),
            len(profile.projects),
        )
        return profile
