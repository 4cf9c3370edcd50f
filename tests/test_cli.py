"""Tests for the typer CLI."""

from __future__ import annotations

import json
import sqlite3

import httpx
import pytest
from typer.testing import CliRunner

from cover_letter.cli import app
from cover_letter.clients.llm_client import LLMClient
from cover_letter.store.profile_store import ProfileStore

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        f"storage:\n  db_path: {tmp_path / 'store.db'}\n"
        f"output:\n  directory: {tmp_path / 'out'}\n"
    )
    return path


@pytest.fixture
def store(tmp_path):
    return ProfileStore(tmp_path / "store.db")


class TestProviders:
    def test_lists_all_providers(self):
        result = runner.invoke(app, ["providers"])
        assert result.exit_code == 0
        for provider_id in ("openai", "openrouter", "groq", "anthropic", "gemini"):
            assert provider_id in result.output


class TestDetect:
    def test_anthropic_key(self):
        result = runner.invoke(app, ["detect", "sk-ant-abc123"])
        assert result.exit_code == 0
        assert "anthropic" in result.output
        assert "Anthropic" in result.output

    def test_short_key_falls_back(self):
        result = runner.invoke(app, ["detect", "abc"])
        assert result.exit_code == 0
        assert "openai" in result.output


class TestSetKey:
    def test_saves_key(self, config_file, store):
        result = runner.invoke(app, ["set-key", "gsk_abcdefghijkl", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Groq" in result.output
        assert store.get_api_key() == "gsk_abcdefghijkl"

    def test_rejects_short_key(self, config_file, store):
        result = runner.invoke(app, ["set-key", "sk-123", "--config", str(config_file)])
        assert result.exit_code == 1
        assert store.get_api_key() is None


class TestShowProfile:
    def test_missing_profile(self, config_file):
        result = runner.invoke(app, ["show-profile", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "No resume stored" in result.output

    def test_json_output(self, config_file, store, sample_profile):
        store.set_profile(sample_profile)
        result = runner.invoke(app, ["show-profile", "--json", "--config", str(config_file)])
        assert result.exit_code == 0
        assert "Jane Doe" in result.output


class TestGenerate:
    def test_requires_job_input(self, config_file):
        result = runner.invoke(app, ["generate", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "--job or --text" in result.output

    def test_missing_api_key(self, config_file, store, sample_profile, monkeypatch):
        monkeypatch.delenv("COVER_LETTER_API_KEY", raising=False)
        store.set_profile(sample_profile)
        result = runner.invoke(
            app, ["generate", "--text", "Hiring!", "--config", str(config_file)]
        )
        assert result.exit_code == 1
        assert "API key missing" in result.output

    def test_writes_pdf(self, tmp_path, config_file, sample_profile, sample_letter, monkeypatch):
        replies = [
            '{"company": "TechCo", "role": "Engineer"}',
            sample_letter,
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"choices": [{"message": {"content": replies.pop(0)}}]}
            )

        transport = httpx.MockTransport(handler)
        monkeypatch.setattr(
            "cover_letter.cli.LLMClient",
            lambda timeout=None: LLMClient(timeout=timeout, transport=transport),
        )
        profile_path = tmp_path / "profile.json"
        profile_path.write_text(json.dumps(sample_profile.model_dump()))

        result = runner.invoke(
            app,
            [
                "generate",
                "--text", "We are TechCo, hiring an Engineer.",
                "--profile", str(profile_path),
                "--api-key", "sk-proj-abc123",
                "--config", str(config_file),
            ],
        )

        assert result.exit_code == 0, result.output
        (pdf,) = (tmp_path / "out").glob("CoverLetter_Jane_Doe_TechCo_Engineer_*.pdf")
        assert pdf.read_bytes().startswith(b"%PDF")
        assert replies == []


class TestConfigErrors:
    @pytest.fixture
    def bad_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(f"llm:\n  timeout: 0\nstorage:\n  db_path: {tmp_path / 'store.db'}\n")
        return path

    @pytest.mark.parametrize(
        "args",
        [
            ["set-key", "gsk_abcdefghijkl"],
            ["show-profile"],
            ["generate", "--text", "Hiring!"],
        ],
    )
    def test_invalid_config_exits_cleanly(self, bad_config, args):
        result = runner.invoke(app, [*args, "--config", str(bad_config)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output
        assert "llm.timeout" in result.output

    def test_parse_resume_invalid_config(self, tmp_path, bad_config):
        resume = tmp_path / "resume.txt"
        resume.write_text("Jane Doe")
        result = runner.invoke(app, ["parse-resume", str(resume), "--config", str(bad_config)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_unknown_config_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("llm:\n  temprature: 0.2\n")
        result = runner.invoke(app, ["show-profile", "--config", str(path)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output


class TestCorruptedProfile:
    @pytest.fixture
    def corrupted_store(self, store):
        with sqlite3.connect(str(store.db_path)) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                ("resume_profile", '{"email": "jane@example.com"}'),
            )
        return store

    def test_show_profile(self, config_file, corrupted_store):
        result = runner.invoke(app, ["show-profile", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "corrupted" in result.output

    def test_generate(self, config_file, corrupted_store):
        result = runner.invoke(
            app,
            ["generate", "--text", "Hiring!", "--api-key", "sk-abc123", "--config", str(config_file)],
        )
        assert result.exit_code == 1
        assert "corrupted" in result.output
