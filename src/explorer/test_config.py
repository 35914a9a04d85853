"""
Tests for explorer configuration loading.
"""

import pytest
from pydantic import ValidationError

from .config import ExplorerConfig, load_config
from .domain import LabelMode


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("LABEL_MODE", "BASE_IRI", "LOG_LEVEL", "MAX_ROWS"):
        monkeypatch.delenv(f"RDF_EXPLORER_{name}", raising=False)

    config = load_config(str(tmp_path / "absent.env"))

    assert config == ExplorerConfig()
    assert config.label_mode == LabelMode.NORMAL
    assert config.base_iri == "http://example.org/base"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RDF_EXPLORER_LABEL_MODE", "advanced")
    monkeypatch.setenv("RDF_EXPLORER_MAX_ROWS", "5")

    config = load_config(str(tmp_path / "absent.env"))

    assert config.label_mode == LabelMode.ADVANCED
    assert config.max_rows == 5


def test_env_file(monkeypatch, tmp_path):
    # setenv then delenv so teardown removes whatever load_dotenv writes
    monkeypatch.setenv("RDF_EXPLORER_BASE_IRI", "unused")
    monkeypatch.delenv("RDF_EXPLORER_BASE_IRI")
    env_file = tmp_path / ".env"
    env_file.write_text("RDF_EXPLORER_BASE_IRI=http://data.example.com/\n", encoding="utf-8")

    config = load_config(str(env_file))

    assert config.base_iri == "http://data.example.com/"


def test_invalid_value_is_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("RDF_EXPLORER_LABEL_MODE", "fancy")

    with pytest.raises(ValidationError):
        load_config(str(tmp_path / "absent.env"))


def test_invalid_log_level_is_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("RDF_EXPLORER_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        load_config(str(tmp_path / "absent.env"))


def test_log_level_is_normalised(monkeypatch, tmp_path):
    monkeypatch.setenv("RDF_EXPLORER_LOG_LEVEL", "debug")

    config = load_config(str(tmp_path / "absent.env"))

    assert config.log_level == "DEBUG"
    assert ExplorerConfig(log_level=" info ").log_level == "INFO"
