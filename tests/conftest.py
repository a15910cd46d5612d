"""Pytest fixtures for building small template trees."""

from __future__ import annotations

from pathlib import Path

import pytest


def write(root: Path, rel: str, text: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A customized template: marker present, no placeholders, no sample terms."""
    write(tmp_path, "TEMPLATE_CONFIG.md", "# Template configuration\n\nProject: {{PROJECT_NAME}}\n")
    write(tmp_path, "README.md", "# Acme Widgets\n\nInternal tooling for widget teams.\n")
    return tmp_path
