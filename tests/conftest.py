"""Shared test fixtures for the flutterly test suite.

Provides a throwaway server layout (HTML page plus scripts directory)
and a helper for writing small executable shell scripts into it.
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Callable

import pytest

from flutterly.config.settings import ServerConfig

SAMPLE_HTML = b"<!doctype html>\n<html><body><h1>split view</h1></body></html>\n"


@pytest.fixture
def sample_html() -> bytes:
    return SAMPLE_HTML


@pytest.fixture
def scripts_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scripts"
    path.mkdir()
    return path


@pytest.fixture
def make_script(scripts_dir: Path) -> Callable[[str, str], Path]:
    """Write an executable ``/bin/sh`` script into the scripts directory."""

    def _make(name: str, body: str) -> Path:
        script = scripts_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def html_path(tmp_path: Path) -> Path:
    path = tmp_path / "split-view.html"
    path.write_bytes(SAMPLE_HTML)
    return path


@pytest.fixture
def server_config(tmp_path: Path, scripts_dir: Path) -> ServerConfig:
    """A ServerConfig pointing at the temporary layout (HTML not created)."""
    return ServerConfig(
        html_path=tmp_path / "split-view.html",
        scripts_dir=scripts_dir,
    )
