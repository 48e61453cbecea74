"""Shared pytest fixtures for the yt-pulse test suite.

* No network access: the YouTube service object and the GenAI client are
  always MagicMocks.
* Config lookups never touch the real home directory.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Point HOME/APPDATA and cwd at a temp dir and clear API key env vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    monkeypatch.setattr("pathlib.Path.home", lambda: home)

    work = tmp_path / "work"
    work.mkdir()
    (work / ".git").mkdir()
    monkeypatch.chdir(work)

    for name in ("YOUTUBE_API_KEY", "GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return home
