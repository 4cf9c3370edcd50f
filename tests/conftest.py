"""Shared test fixtures."""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from cover_letter.clients.llm_client import LLMClient
from cover_letter.export.layout import PageGeometry
from cover_letter.models.profile import ExperienceEntry, ProjectEntry, ResumeProfile


@pytest.fixture
def sample_job_text() -> str:
    return """We are TechCo, hiring a Backend Engineer.

Responsibilities:
- Design and operate Python services handling millions of requests per day
- Own REST APIs end to end

Requirements:
- 2+ years with Python and PostgreSQL
- Experience with Docker and cloud deployments
"""


@pytest.fixture
def sample_profile() -> ResumeProfile:
    return ResumeProfile(
        name="Jane Doe",
        email="jane@example.com",
        phone="555-0100",
        education="B.S. Computer Science, State University, 2022",
        skills="Python, PostgreSQL, Docker, AWS",
        experience=[
            ExperienceEntry(
                title="Backend Developer",
                company="Acme Corp",
                duration="2022 - Present",
                description="Built REST APIs serving 2M requests/day",
            ),
            ExperienceEntry(
                title="Intern",
                company="Beta LLC",
                duration="Summer 2021",
            ),
        ],
        projects=[
            ProjectEntry(
                name="Queue Monitor",
                description="Dashboard for job queue latency",
                technologies="FastAPI, Redis",
            ),
        ],
        summary="Backend engineer focused on reliable Python services.",
    )


@pytest.fixture
def sample_letter() -> str:
    return (
        "Dear Hiring Manager,\n\n"
        "I am excited to apply for the Backend Engineer role at TechCo. "
        "Your focus on reliable services at scale matches the work I enjoy most.\n\n"
        "At Acme Corp I built REST APIs serving two million requests per day, "
        "using Python, PostgreSQL and Docker on AWS.\n\n"
        "I would welcome the chance to discuss how I can contribute.\n\n"
        "Sincerely,\nJane Doe"
    )


@pytest.fixture
def mono_measure() -> Callable[[str], float]:
    """Fixed-width metrics: every character is 1mm wide."""
    return lambda text: float(len(text))


@pytest.fixture
def small_geometry() -> PageGeometry:
    """100x100mm page, 10mm margins: 80mm wide, 8 lines of 10mm per page."""
    return PageGeometry(
        page_width=100,
        page_height=100,
        margin_left=10,
        margin_right=10,
        margin_top=10,
        margin_bottom=10,
        font_size=12,
        line_height=10,
        paragraph_spacing=0,
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.call = AsyncMock(return_value="")
    client.call_auto_detected = AsyncMock(return_value="")
    return client


@pytest.fixture
def make_transport():
    """Build an httpx.MockTransport that records requests and replies with JSON."""

    def _make(payload=None, status_code: int = 200, text: str | None = None):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=payload)

        transport = httpx.MockTransport(handler)
        transport.requests = seen
        return transport

    return _make
