"""Configuration, structured logging and stage instrumentation tests."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylist_app.config import DEFAULT_GEMINI_MODEL, StylistConfig
from stylist_app.logging_config import (
    JsonFormatter,
    correlation_context,
    ensure_correlation_id,
    redact_for_log,
)
from tools.observability import instrument_stage

CONFIG_KEYS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "STYLIST_CONFIG_DIR",
    "GENERATOR_BACKEND",
    "MODEL",
    "GOOGLE_API_KEY",
    "GENERATION_ENDPOINT",
    "GENERATION_TIMEOUT_SECONDS",
    "MAX_OUTFITS_PER_GROUP",
    "MAX_WORKERS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_config_defaults(clean_env):
    config = StylistConfig.from_env()

    assert config.generator_backend == "none"
    assert config.model == DEFAULT_GEMINI_MODEL
    assert config.generation_timeout_seconds == 20.0
    assert config.max_outfits_per_group == 10
    assert config.max_workers == 1


def test_config_reads_yaml_and_env_overrides(clean_env, tmp_path):
    config_dir = tmp_path / "environments"
    config_dir.mkdir()
    (config_dir / "staging.yaml").write_text(
        "# staging\n"
        "generator_backend: http\n"
        'generation_endpoint: "https://generator.local/v1"\n'
        "generation_timeout_seconds: 5\n"
        "max_workers: 4\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("STYLIST_CONFIG_DIR", str(config_dir))
    clean_env.setenv("MAX_WORKERS", "2")

    config = StylistConfig.from_env()

    assert config.environment == "staging"
    assert config.generator_backend == "http"
    assert config.generation_endpoint == "https://generator.local/v1"
    assert config.generation_timeout_seconds == 5.0
    assert config.max_workers == 2


def test_config_rejects_unknown_backend_and_bad_limits():
    with pytest.raises(ValueError):
        StylistConfig(generator_backend="carrier-pigeon")
    with pytest.raises(ValueError):
        StylistConfig(max_outfits_per_group=0)
    assert StylistConfig(generator_backend=" Gemini ", max_workers=0).generator_backend == "gemini"
    assert StylistConfig(max_workers=0).max_workers == 1


def test_redaction_masks_sensitive_keys_and_strings():
    payload = {
        "user_id": "u-1",
        "prompt": "long prompt",
        "nested": [{"email": "a@b.com"}, "contact me at a@b.com", "https://img.local/x.png"],
        "count": 3,
    }

    redacted = redact_for_log(payload)

    assert redacted["user_id"] == "[redacted]"
    assert redacted["prompt"] == "[redacted]"
    assert redacted["nested"][0]["email"] == "[redacted]"
    assert redacted["nested"][1] == "contact me at [redacted-email]"
    assert redacted["nested"][2] == "[redacted-url]"
    assert redacted["count"] == 3


def test_json_formatter_includes_correlation_and_extra_fields():
    record = logging.LogRecord("stylist", logging.INFO, __file__, 1, "outfits_composed", None, None)
    record.strategy = "deterministic"
    with correlation_context("abc123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["correlation_id"] == "abc123"
    assert payload["event"] == "outfits_composed"
    assert payload["strategy"] == "deterministic"


def test_correlation_context_restores_previous_id():
    outer = ensure_correlation_id("outer")
    with correlation_context("inner") as inner:
        assert inner == "inner"
        assert ensure_correlation_id() == "inner"
    assert ensure_correlation_id() == outer


def test_instrument_stage_logs_and_reraises(caplog):
    @instrument_stage("demo")
    def succeed(value: int) -> int:
        return value * 2

    @instrument_stage("broken")
    def fail() -> None:
        raise RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger="tools.observability"):
        assert succeed(2) == 4
        with pytest.raises(RuntimeError):
            fail()

    events = [record.getMessage() for record in caplog.records]
    assert events == ["stage_started", "stage_completed", "stage_started", "stage_failed"]
