"""
config.py

Responsibility: Load the tool configuration into a deterministic, typed model.

Both tools are driven by fixed lists (terms, excluded names, manifests). They
live here as immutable dataclasses and can be overridden from:
- an explicit YAML file (or a markdown file with YAML frontmatter),
- `.template-tools.yaml` at the scan root,
- `verify` / `cleanup` keys in the marker file's YAML frontmatter.

The scanner and remover receive a `ToolConfig` explicitly; nothing reads these
values from module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from finisher.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = ".template-tools.yaml"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class VerifyConfig:
    """Settings for the customization verifier."""

    marker_file: str = "TEMPLATE_CONFIG.md"
    domain_name: str = "Campfire"
    extensions: tuple[str, ...] = (".md",)
    excluded_names: tuple[str, ...] = (
        ".git",
        "node_modules",
        ".DS_Store",
        "TEMPLATE_CONFIG.md",
        "TASK-TEMPLATE-CONVERSION.md",
        CONFIG_FILENAME,
    )
    domain_terms: tuple[str, ...] = (
        "Campfire",
        "outdoor gear",
        "gear setup",
        "outdoor enthusiasts",
        "hiking",
        "camping",
        "backpacking",
    )


@dataclass(frozen=True)
class CleanupConfig:
    """Settings for the scaffold remover."""

    customized_files: tuple[str, ...] = (
        "README.md",
        "ai-context/project-brief.md",
        "strategic/vision.md",
    )
    external_docs: tuple[str, ...] = (
        "docs/README.md",
        "docs/context/project-overview.md",
    )
    # The tool's own control file goes last.
    removal_manifest: tuple[str, ...] = (
        "TEMPLATE_CONFIG.md",
        "SETUP_GUIDE.md",
        "EXTERNAL_DOCS_SETUP.md",
        "QUICK_START.md",
        "CLEANUP_INFO.md",
        "TASK-TEMPLATE-CONVERSION.md",
        CONFIG_FILENAME,
    )
    empty_dirs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ToolConfig:
    verify: VerifyConfig = field(default_factory=VerifyConfig)
    cleanup: CleanupConfig = field(default_factory=CleanupConfig)
    source: str | None = None


_VERIFY_KEYS = {"marker_file", "domain_name", "extensions", "excluded_names", "domain_terms"}
_CLEANUP_KEYS = {"customized_files", "external_docs", "removal_manifest", "empty_dirs"}
_PATH_KEYS = {"marker_file", "customized_files", "external_docs", "removal_manifest", "empty_dirs"}


def _parse_yaml_frontmatter(text: str) -> dict[str, Any] | None:
    """
    If the markdown begins with YAML frontmatter delimited by '---', parse it.
    Returns None when there is no frontmatter.
    """
    if not text.startswith("---\n"):
        return None

    # Search from index 3 so an empty block ("---\n---\n") closes at once.
    end = text.find("\n---\n", 3)
    if end == -1:
        raise ConfigError("YAML frontmatter starts with '---' but no closing '---' was found.")

    return _load_mapping(text[4:end])


def _load_mapping(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping/object at the top level.")
    return data


def _check_relative(key: str, value: str) -> str:
    path = PurePosixPath(value)
    if path.is_absolute() or ".." in path.parts:
        raise ConfigError(f"`{key}` entries must be paths inside the scan root: {value!r}")
    return value


def _string_list(key: str, raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise ConfigError(f"`{key}` must be a list of strings.")
    out: list[str] = []
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"`{key}` must contain only non-empty strings.")
        item = item.strip()
        if key in _PATH_KEYS:
            _check_relative(key, item)
        out.append(item)
    return tuple(out)


def _dedupe_terms(terms: tuple[str, ...]) -> tuple[str, ...]:
    # Matching is case-insensitive, so "Campfire" and "campfire" are one term.
    seen: set[str] = set()
    out: list[str] = []
    for term in terms:
        key = term.lower()
        if key not in seen:
            seen.add(key)
            out.append(term)
    return tuple(out)


def _section(data: dict[str, Any], name: str, allowed: set[str]) -> dict[str, Any]:
    raw = data.get(name) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"`{name}` must be an object/mapping when provided.")
    unknown = sorted(map(str, set(raw) - allowed))
    if unknown:
        raise ConfigError(f"Unknown `{name}` keys: {', '.join(unknown)}")
    return raw


def build_config(data: dict[str, Any], *, source: str | None = None) -> ToolConfig:
    """
    Build a `ToolConfig` from a parsed mapping, filling gaps with defaults.

    Recognized keys:
    - verify.marker_file, verify.domain_name: str
    - verify.extensions, verify.excluded_names, verify.domain_terms: list[str]
    - cleanup.customized_files, cleanup.external_docs,
      cleanup.removal_manifest, cleanup.empty_dirs: list[str]
    """
    unknown = sorted(map(str, set(data) - {"verify", "cleanup"}))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    verify_raw = _section(data, "verify", _VERIFY_KEYS)
    cleanup_raw = _section(data, "cleanup", _CLEANUP_KEYS)

    verify_kwargs: dict[str, Any] = {}
    for key in ("marker_file", "domain_name"):
        if key in verify_raw:
            value = verify_raw[key]
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"`verify.{key}` must be a non-empty string.")
            value = value.strip()
            if key in _PATH_KEYS:
                _check_relative(key, value)
            verify_kwargs[key] = value
    for key in ("extensions", "excluded_names", "domain_terms"):
        if key in verify_raw:
            verify_kwargs[key] = _string_list(key, verify_raw[key])

    verify_kwargs["domain_terms"] = _dedupe_terms(verify_kwargs.get("domain_terms", VerifyConfig.domain_terms))
    verify = VerifyConfig(**verify_kwargs)

    cleanup_kwargs = {key: _string_list(key, value) for key, value in cleanup_raw.items()}
    cleanup = CleanupConfig(**cleanup_kwargs)

    return ToolConfig(verify=verify, cleanup=cleanup, source=source)


def load_config_file(path: str | Path) -> ToolConfig:
    """
    Parse a YAML file, or the YAML frontmatter of a markdown file, into a `ToolConfig`.
    A markdown file without frontmatter yields the defaults.
    """
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Config file does not exist: {p}")
    text = p.read_text(encoding="utf-8", errors="replace")

    if p.suffix.lower() == ".md":
        data = _parse_yaml_frontmatter(text) or {}
    else:
        data = _load_mapping(text)
    return build_config(data, source=str(p))


def _marker_config(marker: Path) -> ToolConfig:
    """
    Marker frontmatter usually belongs to the document itself; only its
    `verify` and `cleanup` keys are read, and unparseable frontmatter is ignored.
    """
    try:
        data = _parse_yaml_frontmatter(marker.read_text(encoding="utf-8", errors="replace"))
    except ConfigError as e:
        logger.debug("ignoring frontmatter in %s: %s", marker, e)
        return ToolConfig()
    if not data:
        return ToolConfig()
    own = {key: data[key] for key in ("verify", "cleanup") if key in data}
    if not own:
        return ToolConfig()
    return build_config(own, source=str(marker))


def load_config(root: str | Path, config_path: str | Path | None = None) -> ToolConfig:
    """
    Resolve the configuration for a scan root.

    An explicit `config_path` wins; otherwise `.template-tools.yaml` at the root,
    then `verify`/`cleanup` frontmatter in the default marker file, then the
    built-in defaults.
    """
    root_path = Path(root)
    marker = root_path / VerifyConfig.marker_file
    if config_path is not None:
        config = load_config_file(config_path)
    elif (root_path / CONFIG_FILENAME).is_file():
        config = load_config_file(root_path / CONFIG_FILENAME)
    elif marker.is_file():
        config = _marker_config(marker)
    else:
        config = ToolConfig()

    logger.debug("configuration source: %s", config.source or "built-in defaults")
    return config
