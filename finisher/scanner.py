"""
scanner.py

Responsibility: Verify that a template tree has been customized.

Three rule families run over every tracked documentation file:
- unresolved `{{VARIABLE}}` placeholders (fail the run),
- residual sample-domain vocabulary (fail the run),
- `@docs/...` references whose target does not exist (advisory only).

Files are visited in sorted relative-path order so reports are reproducible.
This module does not print; rendering lives in `report.py`.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from finisher.config import ToolConfig
from finisher.logging_config import get_logger

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{[A-Z_]+\}\}")
DOC_REFERENCE_RE = re.compile(r"@docs/[^\s)]+")
PLACEHOLDER_OPEN = "{{"


class ScanError(RuntimeError):
    pass


class MarkerMissingError(ScanError):
    def __init__(self, marker_file: str) -> None:
        super().__init__(f"{marker_file} not found")
        self.marker_file = marker_file


@dataclass(frozen=True)
class PlaceholderFinding:
    file: str
    tokens: tuple[str, ...]


@dataclass(frozen=True)
class DomainTermFinding:
    file: str
    line: int
    content: str
    term: str


@dataclass(frozen=True)
class DocReferenceFinding:
    file: str
    reference: str


@dataclass
class ScanResult:
    files_scanned: int = 0
    placeholders: list[PlaceholderFinding] = field(default_factory=list)
    domain_terms: list[DomainTermFinding] = field(default_factory=list)
    missing_docs: list[DocReferenceFinding] = field(default_factory=list)
    unreadable: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """Missing doc references are advisory and never fail a scan."""
        return bool(self.placeholders or self.domain_terms)


def _relative(path: Path, root: Path) -> str:
    return str(path.relative_to(root)).replace(os.sep, "/")


def iter_candidate_files(root: Path, config: ToolConfig) -> list[Path]:
    """
    Return tracked documentation files under root, sorted by relative path.

    Excluded names are pruned at any depth, for directories and files alike.
    The configured marker file is always skipped, whatever it is called.
    """
    excluded = set(config.verify.excluded_names)
    extensions = tuple(config.verify.extensions)
    marker = (root / config.verify.marker_file).resolve()

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        base = Path(dirpath)
        for name in filenames:
            if name in excluded or not name.endswith(extensions):
                continue
            path = base / name
            if path.resolve() == marker:
                continue
            files.append(path)
    files.sort(key=lambda p: _relative(p, root))
    return files


def find_placeholders(text: str) -> tuple[str, ...]:
    """Distinct placeholder tokens in order of first appearance."""
    return tuple(dict.fromkeys(PLACEHOLDER_RE.findall(text)))


def find_domain_terms(text: str, terms: tuple[str, ...]) -> list[tuple[int, str, str]]:
    """
    Return (line_number, trimmed_line, term) for every term found in a line.

    Lines still holding a placeholder are skipped; the placeholder is expected
    to replace the sample wording.
    """
    lowered_terms = [(term, term.lower()) for term in terms]
    hits: list[tuple[int, str, str]] = []
    for number, line in enumerate(text.split("\n"), start=1):
        if PLACEHOLDER_OPEN in line:
            continue
        lowered = line.lower()
        for term, needle in lowered_terms:
            if needle in lowered:
                hits.append((number, line.strip(), term))
    return hits


def find_doc_references(text: str) -> list[str]:
    return DOC_REFERENCE_RE.findall(text)


def scan_file(path: Path, root: Path, config: ToolConfig, result: ScanResult) -> None:
    rel = _relative(path, root)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("skipping unreadable file %s: %s", rel, e)
        result.unreadable.append(rel)
        return
    result.files_scanned += 1
    logger.debug("scanning %s", rel)

    tokens = find_placeholders(text)
    if tokens:
        result.placeholders.append(PlaceholderFinding(file=rel, tokens=tokens))

    for line, content, term in find_domain_terms(text, config.verify.domain_terms):
        result.domain_terms.append(DomainTermFinding(file=rel, line=line, content=content, term=term))

    for reference in find_doc_references(text):
        if not (root / reference[1:]).exists():
            result.missing_docs.append(DocReferenceFinding(file=rel, reference=reference))


def scan_tree(root: str | Path, config: ToolConfig) -> ScanResult:
    root_path = Path(root).resolve()
    result = ScanResult()
    for path in iter_candidate_files(root_path, config):
        scan_file(path, root_path, config, result)
    logger.debug(
        "scan finished: %d files, %d placeholder files, %d domain terms, %d missing docs",
        result.files_scanned,
        len(result.placeholders),
        len(result.domain_terms),
        len(result.missing_docs),
    )
    return result


def check_marker(root: str | Path, config: ToolConfig) -> None:
    """Raise MarkerMissingError unless the marker file exists at the root."""
    if not (Path(root) / config.verify.marker_file).exists():
        raise MarkerMissingError(config.verify.marker_file)


def verify(root: str | Path, config: ToolConfig) -> ScanResult:
    check_marker(root, config)
    return scan_tree(root, config)
