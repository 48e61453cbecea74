from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from yt_pulse.exceptions import ConfigError

_APP_DIR = "yt-pulse"
_ENV_FILENAME = ".env"
_KEY_NAME = "YOUTUBE_API_KEY"
_GEMINI_KEY_NAMES = ("GEMINI_API_KEY", "API_KEY")

# one result page, no pagination
PAGE_SIZE = 25
DEFAULT_REGION = "KR"
DEFAULT_LOOKBACK_DAYS = 30
DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"


def get_api_key() -> str:
    """
    Returns the YouTube API key.

    Lookup order:
      1) Real environment variable: YOUTUBE_API_KEY
      2) Repo-local .env (dev convenience)
      3) Per-user config file (set via `yt-pulse set-key`)
    """
    key = _lookup(_KEY_NAME)
    if key:
        return key

    raise ConfigError(
        f"{_KEY_NAME} not set.",
        hint=(
            "Set it in your environment, run `yt-pulse set-key YOUR_KEY`, or create a config file:\n\n"
            f"  {_user_config_path()}\n"
            f"  {_KEY_NAME}=YOUR_KEY_HERE\n"
        ),
    )


def get_gemini_api_key() -> str:
    """Same lookup order as get_api_key(), for GEMINI_API_KEY (or API_KEY)."""
    for name in _GEMINI_KEY_NAMES:
        key = _lookup(name)
        if key:
            return key

    raise ConfigError(
        "GEMINI_API_KEY not set.",
        hint=f"Set it in your environment or add GEMINI_API_KEY=... to {_user_config_path()}",
    )


def save_api_key(key: str) -> Optional[Path]:
    """
    Saves the YouTube API key to the per-user config file.
    Keeps any other KEY=VALUE lines already in the file.
    Does NOT modify the process environment.
    """
    key = (key or "").strip()
    if not key:
        return None

    path = _user_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    if path.exists():
        lines = [
            line
            for line in path.read_text(encoding="utf-8").splitlines()
            if not line.strip().startswith(f"{_KEY_NAME}=")
        ]
    lines.append(f"{_KEY_NAME}={key}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def load_setting(key: str, default: Any = None) -> Any:
    path = _user_settings_path()
    if not path.exists():
        return default
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return default
    return data.get(key, default)


def save_setting(key: str, value: Any) -> None:
    path = _user_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {}
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            data = {}
    data[key] = value
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _lookup(name: str) -> str:
    key = os.getenv(name)
    if key:
        return key

    _load_dotenv_if_present()
    key = os.getenv(name)
    if key:
        return key

    _load_user_config_if_present()
    return os.getenv(name) or ""


def _load_dotenv_if_present() -> None:
    """
    .env loader:
    Does not override already-set environment variables
    """
    env_path = _find_repo_root() / _ENV_FILENAME
    if not env_path.exists():
        return

    _load_env_file(env_path)


def _load_user_config_if_present() -> None:
    path = _user_config_path()
    if not path.exists():
        return

    _load_env_file(path)


def _load_env_file(path: Path) -> None:
    """
    Loads KEY=VALUE lines into os.environ via setdefault (won't override real env vars).
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")  # allow quoted values
        if not k:
            continue

        os.environ.setdefault(k, v)


def _config_dir() -> Path:
    """
    %APPDATA%\\yt-pulse on Windows
    ~/.config/yt-pulse on macOS/Linux
    """
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / _APP_DIR
    return Path.home() / ".config" / _APP_DIR


def _user_config_path() -> Path:
    return _config_dir() / "config.env"


def _user_settings_path() -> Path:
    return _config_dir() / "settings.json"


def _find_repo_root() -> Path:
    """
    Finds the repo root by walking upward until we see pyproject.toml or .git.
    Falls back to current working directory.
    """
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return cwd
