"""Main pipeline orchestrator - job text + profile to a finished PDF."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable

from cover_letter.clients.llm_client import LLMClient
from cover_letter.errors import ConfigurationError
from cover_letter.export.layout import Document, PageGeometry
from cover_letter.export.pdf_renderer import render_cover_letter_pdf
from cover_letter.models.job import ExtractedJobInfo
from cover_letter.models.profile import ResumeProfile
from cover_letter.pipeline.cover_letter import CoverLetterWriter
from cover_letter.pipeline.job_info import JobInfoExtractor
from cover_letter.utils.text import build_output_filename

logger = logging.getLogger(__name__)


@dataclass
class CoverLetterResult:
    """Complete result of one cover letter request."""

    job_info: ExtractedJobInfo
    letter: str
    document: Document
    pdf_bytes: bytes
    filename: str
    elapsed_seconds: float = 0.0


class CoverLetterPipeline:
    """Extract job info, draft the letter, lay it out and render it."""

    def __init__(
        self,
        llm: LLMClient,
        *,
        provider: str | None = None,
        model: str | None = None,
        geometry: PageGeometry | None = None,
        extraction_temperature: float = 0.1,
        letter_temperature: float = 0.5,
    ):
        self.job_info_extractor = JobInfoExtractor(
            llm, provider=provider, model=model, temperature=extraction_temperature
        )
        self.writer = CoverLetterWriter(
            llm, provider=provider, model=model, temperature=letter_temperature
        )
        self.geometry = geometry or PageGeometry()

    async def run(
        self,
        job_text: str,
        profile: ResumeProfile | None,
        credential: str | None,
        *,
        today: date | None = None,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> CoverLetterResult:
        """Run the full request; raises on anything but a job-info failure.

        Args:
            job_text: Selected job posting text.
            profile: Parsed resume; ``name`` is required.
            credential: Provider API key.
            today: Date stamped into the file name (defaults to today).
            on_phase: Optional callback(phase_name, detail) for progress.
        """
        if not credential or not credential.strip():
            raise ConfigurationError("API key missing. Set it with `cover-letter set-key`.")
        if profile is None or not profile.name:
            raise ConfigurationError(
                "Resume missing. Import one with `cover-letter parse-resume` first."
            )
        if not job_text or not job_text.strip():
            raise ConfigurationError("No job description text supplied.")

        start = time.monotonic()

        def _notify(phase: str, detail: str = ""):
            if on_phase:
                on_phase(phase, detail)

        _notify("extract", "Reading company and role from the job posting")
        job_info = await self.job_info_extractor.extract(job_text, credential)

        _notify("write", f"Writing cover letter for {job_info.company} - {job_info.role}")
        letter = await self.writer.generate(job_text, profile, credential)

        _notify("render", "Laying out PDF")
        document, pdf_bytes = render_cover_letter_pdf(letter, self.geometry)
        filename = build_output_filename(profile.name, job_info.company, job_info.role, today)

        elapsed = time.monotonic() - start
        _notify("done", f"{filename} ({document.page_count} page(s), {elapsed:.1f}s)")
        logger.info("Cover letter ready: %s", filename)

        return CoverLetterResult(
            job_info=job_info,
            letter=letter,
            document=document,
            pdf_bytes=pdf_bytes,
            filename=filename,
            elapsed_seconds=elapsed,
        )
