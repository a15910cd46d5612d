from __future__ import annotations

from pathlib import Path

import pytest

from finisher.config import (
    CONFIG_FILENAME,
    CleanupConfig,
    ConfigError,
    ToolConfig,
    VerifyConfig,
    build_config,
    load_config,
)

from conftest import write


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == ToolConfig()
    assert config.source is None
    assert config.cleanup.removal_manifest[-1] == CONFIG_FILENAME


def test_root_yaml_file_overrides_defaults(tmp_path: Path) -> None:
    write(
        tmp_path,
        CONFIG_FILENAME,
        "verify:\n"
        "  domain_name: Bakery\n"
        "  domain_terms: [Sourdough, sourdough, croissant]\n"
        "cleanup:\n"
        "  removal_manifest: [SETUP_GUIDE.md]\n",
    )
    config = load_config(tmp_path)
    assert config.verify.domain_name == "Bakery"
    assert config.verify.domain_terms == ("Sourdough", "croissant")
    assert config.verify.excluded_names == VerifyConfig().excluded_names
    assert config.cleanup.removal_manifest == ("SETUP_GUIDE.md",)
    assert config.cleanup.external_docs == CleanupConfig().external_docs
    assert config.source == str(tmp_path / CONFIG_FILENAME)


def test_marker_frontmatter_is_used_when_present(tmp_path: Path) -> None:
    write(
        tmp_path,
        "TEMPLATE_CONFIG.md",
        "---\ncleanup:\n  empty_dirs: [setup]\n---\n# Template configuration\n",
    )
    config = load_config(tmp_path)
    assert config.cleanup.empty_dirs == ("setup",)


def test_marker_without_frontmatter_gives_defaults(tmp_path: Path) -> None:
    write(tmp_path, "TEMPLATE_CONFIG.md", "# Template configuration\n")
    assert load_config(tmp_path) == ToolConfig()


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path, tmp_path / "nope.yaml")


def test_unclosed_frontmatter_is_rejected(tmp_path: Path) -> None:
    path = write(tmp_path, "custom.md", "---\nverify: {}\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path, path)


@pytest.mark.parametrize(
    "data",
    [
        {"extra": 1},
        {"verify": ["not", "a", "mapping"]},
        {"verify": {"domain_terms": "hiking"}},
        {"verify": {"unknown": []}},
        {"verify": {"marker_file": ""}},
        {"cleanup": {"removal_manifest": ["/etc/passwd"]}},
        {"cleanup": {"empty_dirs": ["../outside"]}},
        {"cleanup": {"external_docs": [1]}},
    ],
)
def test_invalid_configuration_is_rejected(data: dict) -> None:
    with pytest.raises(ConfigError):
        build_config(data)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    write(tmp_path, CONFIG_FILENAME, "verify: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_marker_document_frontmatter_is_not_configuration(tmp_path: Path) -> None:
    write(tmp_path, "TEMPLATE_CONFIG.md", "---\ntitle: Template Configuration\n---\n# Config\n")
    assert load_config(tmp_path) == ToolConfig()


def test_marker_empty_frontmatter_gives_defaults(tmp_path: Path) -> None:
    write(tmp_path, "TEMPLATE_CONFIG.md", "---\n---\n# Config\n")
    assert load_config(tmp_path) == ToolConfig()


def test_marker_unparseable_frontmatter_gives_defaults(tmp_path: Path) -> None:
    write(tmp_path, "TEMPLATE_CONFIG.md", "---\ntitle: [unclosed\n")
    assert load_config(tmp_path) == ToolConfig()


def test_marker_frontmatter_keeps_only_tool_sections(tmp_path: Path) -> None:
    write(
        tmp_path,
        "TEMPLATE_CONFIG.md",
        "---\ntitle: Template Configuration\nverify:\n  domain_name: Bakery\n---\n# Config\n",
    )
    config = load_config(tmp_path)
    assert config.verify.domain_name == "Bakery"
    assert config.source == str(tmp_path / "TEMPLATE_CONFIG.md")
