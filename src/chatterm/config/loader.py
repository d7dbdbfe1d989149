"""Settings loading.

Hides where configuration comes from and in which order sources win:
defaults < YAML file < environment variables.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from .models import Settings

ENV_PREFIX = "CHATTERM"
CONFIG_FILENAMES = ("config.yaml", "config.yml")


class SettingsError(Exception):
    """Raised when settings cannot be loaded."""


def _search_dirs() -> list[Path]:
    return [
        Path("."),
        Path("configs"),
        Path.home() / ".config" / "chatterm",
    ]


def find_config_file(search_dirs: list[Path] | None = None) -> Path | None:
    """Return the first config file found in the search directories."""
    for directory in search_dirs if search_dirs is not None else _search_dirs():
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"error reading config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"config file {path} must contain a mapping")
    return data


def _apply_env_overrides(data: dict[str, Any], environ: dict[str, str]) -> dict[str, Any]:
    """Overlay CHATTERM_<SECTION>_<KEY> variables onto the raw settings."""
    merged: dict[str, Any] = {}
    for section, values in data.items():
        if values is not None and not isinstance(values, dict):
            raise SettingsError(f"config section '{section}' must be a mapping")
        merged[section] = dict(values or {})

    for section_name, section_field in Settings.model_fields.items():
        section_model = section_field.annotation
        for key in section_model.model_fields:
            env_name = f"{ENV_PREFIX}_{section_name}_{key}".upper()
            value = environ.get(env_name)
            if value:
                merged.setdefault(section_name, {})[key] = value

    # Fall back to the conventional OpenAI variable when no key is configured
    llm = merged.setdefault("llm", {})
    if not llm.get("api_key") and environ.get("OPENAI_API_KEY"):
        llm["api_key"] = environ["OPENAI_API_KEY"]

    return merged


def _prepare_chats_dir(settings: Settings) -> Settings:
    chats_dir = Path(settings.storage.chats_dir).expanduser()
    try:
        chats_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SettingsError(f"failed to create chats directory: {e}") from e

    storage = settings.storage.model_copy(update={"chats_dir": str(chats_dir.resolve())})
    return settings.model_copy(update={"storage": storage})


def load_settings(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
    use_dotenv: bool = True,
) -> Settings:
    """Load settings from defaults, a YAML file and the environment.

    Args:
        path: Explicit config file. Must exist when given. When None, the
            standard search directories are tried and a missing file is fine.
        environ: Environment mapping (defaults to os.environ)
        use_dotenv: Load a .env file into the process environment first

    Returns:
        Validated settings with an absolute, existing chats directory

    Raises:
        SettingsError: If any source is invalid or the chats directory
            cannot be created
    """
    if use_dotenv:
        load_dotenv()
    env = dict(os.environ) if environ is None else environ

    if path is not None:
        if not path.is_file():
            raise SettingsError(f"config file not found: {path}")
        config_file: Path | None = path
    else:
        config_file = find_config_file()

    raw = _read_yaml(config_file) if config_file is not None else {}
    raw = _apply_env_overrides(raw, env)

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as e:
        raise SettingsError(f"unable to decode config: {e}") from e

    return _prepare_chats_dir(settings)
