"""
Finding Gating

Dedup, rank, cap.
Pipeline: dedup → rank → cap
"""
from typing import List, Optional

from .reporting import Finding


def _dedup(findings: List[Finding]) -> List[Finding]:
    # A file reached through two input paths is reported once
    seen: dict[Finding, None] = {}
    for f in findings:
        seen.setdefault(f, None)
    return list(seen)


def _rank(findings: List[Finding]) -> List[Finding]:
    return sorted(
        findings,
        key=lambda f: (f.path, f.line, f.column, f.detector),
    )


def _cap(findings: List[Finding], max_findings: Optional[int]) -> List[Finding]:
    if max_findings is None:
        return findings
    return findings[:max_findings]


def gate_findings(findings: List[Finding], max_findings: Optional[int] = None) -> List[Finding]:
    deduped = _dedup(findings)
    ranked  = _rank(deduped)
    capped  = _cap(ranked, max_findings)
    return capped
