"""Prompt pipeline stages and the end-to-end orchestrator."""

from cover_letter.pipeline.cover_letter import CoverLetterWriter, build_profile_context
from cover_letter.pipeline.job_info import JobInfoExtractor
from cover_letter.pipeline.orchestrator import CoverLetterPipeline, CoverLetterResult
from cover_letter.pipeline.resume_parser import ResumeParser

__all__ = [
    "CoverLetterPipeline",
    "CoverLetterResult",
    "CoverLetterWriter",
    "JobInfoExtractor",
    "ResumeParser",
    "build_profile_context",
]
