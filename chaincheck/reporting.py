"""
Reporting sink.

Detectors call `report(node, message_key, *args)`; the sink turns that
into a positioned Finding. Wording lives in explanation.py.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from .syntax import SyntaxNode


@dataclass(frozen=True)
class Finding:
    path:        str
    line:        int
    column:      int
    detector:    str
    message_key: str
    args:        Tuple[str, ...] = ()

    def location(self) -> str:
        return f"{self.path}:{self.line}:{self.column + 1}"


@dataclass
class Reporter:
    """Collects findings for one file and one detector at a time."""
    path: str
    detector: str = ""
    findings: List[Finding] = field(default_factory=list)

    def report(self, node: SyntaxNode, message_key: str, *args: str) -> None:
        self.findings.append(Finding(
            path=self.path,
            line=node.line,
            column=node.column,
            detector=self.detector,
            message_key=message_key,
            args=tuple(str(arg) for arg in args),
        ))
