"""
Orchestrator

Glue layer. Wires front end, detectors, reporting and gating together.
No matching logic lives here.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from .config import Config
from .detectors import Detector, check_catch_clause
from .frontend import build_tree
from .git_history import changed_python_files
from .reporting import Finding, Reporter
from .syntax import NodeKind, SyntaxNode, is_kind, walk_scoped
from .warnings import gate_findings

logger = logging.getLogger(__name__)


# Catch clause checks, keyed by the name findings are reported under
_DETECTORS: Dict[str, Detector] = {
    "hidden_cause": check_catch_clause,
}


def iter_catch_clauses(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Every catch clause in the tree, nested ones included, in document order."""
    return walk_scoped(root, is_kind(NodeKind.CATCH_CLAUSE), boundaries=frozenset())


def analyze_tree(root: SyntaxNode, display_path: str) -> List[Finding]:
    findings: List[Finding] = []

    for clause in iter_catch_clauses(root):
        for detector_name, check in _DETECTORS.items():
            reporter = Reporter(path=display_path, detector=detector_name)
            check(clause, reporter)
            findings.extend(reporter.findings)

    return findings


def analyze_source(source: str, filename: str = "<unknown>") -> List[Finding]:
    """Analyze one module's source. SyntaxError propagates."""
    return analyze_tree(build_tree(source, filename), filename)


def analyze_file(file_path: Path, display_path: Optional[str] = None) -> List[Finding]:
    """Analyze one file. Unreadable or unparsable files are skipped with a warning."""
    display = display_path or str(file_path)
    try:
        source = file_path.read_text(encoding="utf-8")
        tree = build_tree(source, filename=display)
    except (SyntaxError, UnicodeDecodeError, OSError, RecursionError) as e:
        logger.warning("Skipping %s: %s", display, e)
        return []

    findings = analyze_tree(tree, display)
    logger.debug("%s: %d finding(s)", display, len(findings))
    return findings


def _display_path(file_path: Path) -> str:
    if not file_path.is_absolute():
        return str(file_path)
    try:
        return str(file_path.relative_to(Path.cwd()))
    except ValueError:
        return str(file_path)


def _is_excluded(file_path: Path, base: Path, config: Config) -> bool:
    parts = file_path.relative_to(base).parts[:-1]
    return any(config.is_excluded(p) for p in parts)


def _discover(path: Path, config: Config) -> Iterator[Path]:
    if path.is_file():
        yield path
        return

    for file_path in sorted(path.rglob("*.py")):
        if _is_excluded(file_path, path, config):
            continue
        yield file_path


def _discover_changed(path: Path, config: Config) -> Iterator[Path]:
    repo_dir = path if path.is_dir() else path.parent
    resolved = path.resolve()

    for file_path in changed_python_files(str(repo_dir), config.base_ref):
        if file_path != resolved and resolved not in file_path.parents:
            continue
        if path.is_dir() and _is_excluded(file_path, resolved, config):
            continue
        yield file_path


def collect_files(paths: Iterable[Path], config: Config) -> List[Path]:
    """Files to analyze, in input order, each at most once."""
    files: Dict[Path, None] = {}

    for path in paths:
        path = Path(path)
        if not path.exists():
            raise ValueError(f"Path does not exist: {path}")

        discover = _discover_changed if config.changed_only else _discover
        for file_path in discover(path, config):
            files.setdefault(file_path, None)

    return list(files)


def analyze_paths(paths: Iterable[Path], config: Optional[Config] = None) -> List[Finding]:
    """
    Analyze files and directories.

    Directories are searched for *.py files, skipping hidden and excluded
    directories. Returns gated findings.
    """
    config = config or Config()

    all_findings: List[Finding] = []
    files = collect_files(paths, config)
    logger.info("Analyzing %d file(s)", len(files))

    for file_path in files:
        all_findings.extend(analyze_file(file_path, _display_path(file_path)))

    return gate_findings(all_findings, config.max_findings)
