"""
Hidden cause detector.

Detects raise statements inside a catch clause that do not pass the
caught exception along as the cause of the new exception.

VIOLATION PATTERN: Cause exception lost.

Matches:
- except E as e: raise Other()
- except E as e: raise Other("failed: " + e.args[0])
- except E as e: raise Other(e.args)

Does not match:
- except E as e: raise e
- except E as e: raise Other() from e
- except E as e: raise Other(e)
- except E as e: wrapped = Other(e); raise wrapped
"""
from typing import List, Sequence

from ..reporting import Reporter
from ..syntax import SCOPE_BOUNDARIES, SyntaxNode
from . import Violation
from .aliases import track_aliases
from .utils import (
    collect_identifiers,
    collect_raise_statements,
    exception_name,
    is_member_access_operand,
)

MESSAGE_KEY = "avoid.hiding.cause.exception"


def preserves_cause(statement: SyntaxNode, aliases: Sequence[str]) -> bool:
    """
    Check whether a raise statement references the caught exception.

    Only a plain reference counts. `e.args` or `e.with_traceback(...)`
    inspects the exception instead of chaining it, so an identifier
    directly under a member access is rejected.
    """
    for identifier in collect_identifiers(statement, SCOPE_BOUNDARIES):
        if is_member_access_operand(identifier):
            continue
        if identifier.text in aliases:
            return True
    return False


def find_hidden_causes(clause: SyntaxNode) -> List[Violation]:
    """
    Analyze one catch clause.

    Returns one Violation per offending raise statement, in document
    order. Nested clauses are not inspected; analyze them separately.
    """
    original = exception_name(clause)

    aliases = [original]
    aliases.extend(track_aliases(clause, original))

    return [
        Violation(statement=statement, exception_name=original)
        for statement in collect_raise_statements(clause)
        if not preserves_cause(statement, aliases)
    ]


def check_catch_clause(clause: SyntaxNode, reporter: Reporter) -> int:
    """Report every violation in `clause`. Returns the number reported."""
    violations = find_hidden_causes(clause)
    for violation in violations:
        reporter.report(violation.statement, MESSAGE_KEY, violation.exception_name)
    return len(violations)
