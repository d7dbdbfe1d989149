"""Unit tests for settings loading."""
from pathlib import Path

import pytest
import yaml

from chatterm.config import (
    RequestPolicy,
    Settings,
    SettingsError,
    find_config_file,
    load_settings,
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Isolated working and home directory with no config file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def write_config(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestDefaults:
    """Tests for default settings."""

    def test_model_defaults(self):
        settings = Settings()

        assert settings.llm.provider == "openai"
        assert settings.llm.model == "gpt-3.5-turbo"
        assert settings.llm.endpoint == "https://api.openai.com/v1/chat/completions"
        assert settings.llm.max_tokens == 2000
        assert settings.llm.request_policy is RequestPolicy.SERIAL
        assert settings.ui.theme == "catppuccin-mocha"
        assert settings.ui.max_width == 100
        assert settings.ui.show_timestamp is True
        assert settings.ui.focus_on_reply is False
        assert settings.ui.input_char_limit == 4096
        assert settings.storage.chats_dir == "chats"

    def test_load_without_file(self, workdir):
        settings = load_settings(environ={}, use_dotenv=False)

        assert settings.llm.model == "gpt-3.5-turbo"
        assert settings.llm.api_key == ""
        assert Path(settings.storage.chats_dir) == (workdir / "chats").resolve()
        assert (workdir / "chats").is_dir()


class TestConfigFile:
    """Tests for YAML configuration."""

    def test_explicit_file(self, workdir):
        path = write_config(
            workdir / "custom.yaml",
            {
                "llm": {"model": "gpt-4o", "api_key": "sk-file"},
                "ui": {"show_timestamp": False},
                "storage": {"chats_dir": "saved"},
            },
        )

        settings = load_settings(path, environ={}, use_dotenv=False)

        assert settings.llm.model == "gpt-4o"
        assert settings.llm.api_key == "sk-file"
        assert settings.ui.show_timestamp is False
        assert (workdir / "saved").is_dir()

    def test_discovered_file(self, workdir):
        (workdir / "configs").mkdir()
        write_config(workdir / "configs" / "config.yml", {"llm": {"model": "found"}})

        assert find_config_file() == Path("configs") / "config.yml"
        assert load_settings(environ={}, use_dotenv=False).llm.model == "found"

    def test_current_directory_wins(self, workdir):
        (workdir / "configs").mkdir()
        write_config(workdir / "configs" / "config.yaml", {"llm": {"model": "nested"}})
        write_config(workdir / "config.yaml", {"llm": {"model": "local"}})

        assert load_settings(environ={}, use_dotenv=False).llm.model == "local"

    def test_empty_file_gives_defaults(self, workdir):
        path = workdir / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_settings(path, environ={}, use_dotenv=False).llm.provider == "openai"

    def test_missing_explicit_file(self, workdir):
        with pytest.raises(SettingsError, match="not found"):
            load_settings(workdir / "absent.yaml", environ={}, use_dotenv=False)

    def test_invalid_yaml(self, workdir):
        path = workdir / "config.yaml"
        path.write_text("llm: [unclosed", encoding="utf-8")

        with pytest.raises(SettingsError):
            load_settings(path, environ={}, use_dotenv=False)

    def test_non_mapping_file(self, workdir):
        path = workdir / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(SettingsError, match="mapping"):
            load_settings(path, environ={}, use_dotenv=False)

    def test_non_mapping_section(self, workdir):
        path = write_config(workdir / "config.yaml", {"llm": "gpt-4o"})

        with pytest.raises(SettingsError, match="llm"):
            load_settings(path, environ={}, use_dotenv=False)

    def test_invalid_value(self, workdir):
        path = write_config(workdir / "config.yaml", {"llm": {"max_tokens": 0}})

        with pytest.raises(SettingsError, match="unable to decode config"):
            load_settings(path, environ={}, use_dotenv=False)

    def test_unknown_policy(self, workdir):
        path = write_config(workdir / "config.yaml", {"llm": {"request_policy": "random"}})

        with pytest.raises(SettingsError):
            load_settings(path, environ={}, use_dotenv=False)

    def test_uncreatable_chats_dir(self, workdir):
        (workdir / "blocked").write_text("a file", encoding="utf-8")
        path = write_config(workdir / "config.yaml", {"storage": {"chats_dir": "blocked/chats"}})

        with pytest.raises(SettingsError, match="chats directory"):
            load_settings(path, environ={}, use_dotenv=False)


class TestEnvironment:
    """Tests for environment variable overrides."""

    def test_env_overrides_file(self, workdir):
        path = write_config(workdir / "config.yaml", {"llm": {"model": "from-file"}})
        environ = {
            "CHATTERM_LLM_MODEL": "from-env",
            "CHATTERM_LLM_REQUEST_POLICY": "concurrent",
            "CHATTERM_UI_FOCUS_ON_REPLY": "true",
            "CHATTERM_UI_MAX_WIDTH": "72",
        }

        settings = load_settings(path, environ=environ, use_dotenv=False)

        assert settings.llm.model == "from-env"
        assert settings.llm.request_policy is RequestPolicy.CONCURRENT
        assert settings.ui.focus_on_reply is True
        assert settings.ui.max_width == 72

    def test_openai_key_fallback(self, workdir):
        settings = load_settings(environ={"OPENAI_API_KEY": "sk-openai"}, use_dotenv=False)
        assert settings.llm.api_key == "sk-openai"

    def test_configured_key_beats_fallback(self, workdir):
        environ = {"CHATTERM_LLM_API_KEY": "sk-chatterm", "OPENAI_API_KEY": "sk-openai"}
        settings = load_settings(environ=environ, use_dotenv=False)
        assert settings.llm.api_key == "sk-chatterm"

    def test_empty_env_value_is_ignored(self, workdir):
        settings = load_settings(environ={"CHATTERM_LLM_MODEL": ""}, use_dotenv=False)
        assert settings.llm.model == "gpt-3.5-turbo"

