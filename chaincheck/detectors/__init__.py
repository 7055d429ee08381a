"""
Catch Clause Detectors

Detectors answer: "Which statements in this catch clause violate the pattern?"

Design principles:
- Input is one catch clause; no project-wide context
- Stateless (nothing survives between clauses)
- Lexical name matching only (no types, no imports)
- No severity, formatting, or suppression

Ambiguity handling:
- Conservative: only a direct, plain reference counts as evidence
- Malformed trees fail fast with MalformedTreeError
"""
from dataclasses import dataclass
from typing import Callable

from ..reporting import Reporter
from ..syntax import SyntaxNode


@dataclass(frozen=True)
class Violation:
    """A raise statement that loses the caught exception."""
    statement: SyntaxNode
    exception_name: str  # The declared parameter name, never an alias

    @property
    def line(self) -> int:
        return self.statement.line

    @property
    def column(self) -> int:
        return self.statement.column


# Detector type signature
# (catch clause, reporting sink) -> number of violations reported
Detector = Callable[[SyntaxNode, Reporter], int]


from .aliases import track_aliases
from .hidden_cause import (
    MESSAGE_KEY,
    check_catch_clause,
    find_hidden_causes,
    preserves_cause,
)
from .utils import collect_identifiers, collect_raise_statements, exception_name

__all__ = [
    'Violation',
    'Detector',
    'MESSAGE_KEY',
    'check_catch_clause',
    'collect_identifiers',
    'collect_raise_statements',
    'exception_name',
    'find_hidden_causes',
    'preserves_cause',
    'track_aliases',
]
