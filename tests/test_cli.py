"""Tests for the command line interface."""
import pytest
import yaml
from typer.testing import CliRunner

from chatterm.cli import app
from chatterm.cli.app import mask_secret

runner = CliRunner()


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("CHATTERM_LLM_API_KEY", raising=False)
    monkeypatch.delenv("CHATTERM_LLM_MODEL", raising=False)
    return tmp_path


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", "(not set)"),
        ("abc", "***"),
        ("sk-secret-1234", "**********1234"),
    ],
)
def test_mask_secret(value: str, expected: str):
    assert mask_secret(value) == expected


def test_settings_command(clean_env):
    config = clean_env / "chat.yaml"
    config.write_text(
        yaml.safe_dump({"llm": {"model": "gpt-4o", "api_key": "sk-secret-1234"}}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["--config", str(config), "settings"])

    assert result.exit_code == 0
    assert "gpt-4o" in result.output
    assert "1234" in result.output
    assert "sk-secret" not in result.output


def test_missing_config_exits_with_error(clean_env):
    result = runner.invoke(app, ["--config", str(clean_env / "absent.yaml"), "settings"])

    assert result.exit_code == 1
    assert "Error loading config" in result.output


def test_invalid_log_level(clean_env):
    result = runner.invoke(app, ["--log-level", "verbose"])

    assert result.exit_code == 1
    assert "invalid log level" in result.output
