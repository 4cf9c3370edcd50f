"""Cover letter drafting from a job posting and a resume profile."""

from __future__ import annotations

import logging

from cover_letter.errors import CoverLetterError, CoverLetterGenerationError, MalformedResponseError
from cover_letter.models.profile import ResumeProfile
from cover_letter.pipeline.base import PromptStage

logger = logging.getLogger(__name__)

COVER_LETTER_PROMPT = """\
You are writing a professional cover letter for a job application.

APPLICANT INFORMATION:
{profile_context}

JOB DESCRIPTION:
{job_text}

INSTRUCTIONS:
Write a polished, professional cover letter (150-200 words) following this structure:

1. **Opening Paragraph** (2-3 sentences)
   - Address the hiring manager professionally
   - State the specific role being applied for
   - Express genuine interest in the company/position

2. **Middle Paragraph** (3-4 sentences)
   - Highlight 3-4 relevant skills/experiences from the resume that match the job
   - Use ONLY real experiences from the applicant information above
   - Provide specific examples and achievements
   - Connect skills directly to job requirements

3. **Closing Paragraph** (2 sentences)
   - Reinforce enthusiasm and fit
   - Express interest in next steps
   - Professional sign-off

CRITICAL RULES:
- Use ONLY information from the applicant information above
- DO NOT invent experiences, companies, or projects
- Keep length between 150-200 words
- Use confident, warm, professional tone
- Separate paragraphs with a blank line
- Sign off with: "Sincerely,\\n{name}"
- Output ONLY the cover letter text, no headings or metadata

Generate the cover letter now:"""


def build_profile_context(profile: ResumeProfile) -> str:
    """Render a profile as the plain-text block embedded in prompts."""
    lines = [f"Name: {profile.name}"]
    if profile.email:
        lines.append(f"Email: {profile.email}")
    if profile.phone:
        lines.append(f"Phone: {profile.phone}")

    lines += ["", "EDUCATION:", profile.education or "Not specified"]
    lines += ["", "SKILLS:", profile.skills or "Not specified"]

    if profile.experience:
        lines += ["", "WORK EXPERIENCE:"]
        for idx, exp in enumerate(profile.experience, start=1):
            lines.append(f"{idx}. {exp.title} at {exp.company} ({exp.duration})")
            if exp.description:
                lines.append(f"   {exp.description}")

    if profile.projects:
        lines += ["", "PROJECTS:"]
        for idx, proj in enumerate(profile.projects, start=1):
            lines.append(f"{idx}. {proj.name}")
            if proj.description:
                lines.append(f"   {proj.description}")
            if proj.technologies:
                lines.append(f"   Technologies: {proj.technologies}")

    if profile.summary:
        lines += ["", "PROFESSIONAL SUMMARY:", profile.summary]

    return "\n".join(lines) + "\n"


def build_cover_letter_prompt(job_text: str, profile: ResumeProfile) -> str:
    return COVER_LETTER_PROMPT.format(
        profile_context=build_profile_context(profile),
        job_text=job_text,
        name=profile.name,
    )


class CoverLetterWriter(PromptStage):
    temperature = 0.5

    async def generate(self, job_text: str, profile: ResumeProfile, credential: str) -> str:
        """Draft the letter. Any failure, including an empty answer, is fatal."""
        logger.info("Generating cover letter for %s", profile.name)
        prompt = build_cover_letter_prompt(job_text, profile)
        try:
            letter = (await self._complete(prompt, credential)).strip()
            if not letter:
                provider = self.provider or "auto-detected provider"
                raise MalformedResponseError(provider, "Response contained no letter text")
        except CoverLetterError as e:
            raise CoverLetterGenerationError(f"Failed to generate cover letter: {e}") from e
        return letter
