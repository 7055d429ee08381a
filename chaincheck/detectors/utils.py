"""
Stateless utility functions for catch clause detection.

These are pure helper functions, not class methods.
Detectors use these as needed but remain standalone.
"""
from typing import FrozenSet, List

from ..syntax import (
    NESTED_TRY_BOUNDARY,
    SCOPE_BOUNDARIES,
    MalformedTreeError,
    NodeKind,
    SyntaxNode,
    is_kind,
    walk_scoped,
)

# Clause structure utilities

def parameter_declaration(clause: SyntaxNode) -> SyntaxNode:
    """Return the clause's parameter declaration or fail fast."""
    if clause.kind is not NodeKind.CATCH_CLAUSE:
        raise MalformedTreeError(
            f"Expected a catch clause, got {clause.kind.value} at line {clause.line}"
        )

    declaration = clause.first_child(NodeKind.PARAMETER_DECLARATION)
    if declaration is None:
        raise MalformedTreeError(
            f"Catch clause at line {clause.line} has no parameter declaration"
        )
    return declaration


def exception_name(clause: SyntaxNode) -> str:
    """
    Name bound to the caught exception.

    The declared name is the last child of the parameter declaration;
    anything before it is the exception type.
    """
    declaration = parameter_declaration(clause)
    name_node = declaration.last_child()
    if name_node is None or name_node.kind is not NodeKind.IDENTIFIER:
        raise MalformedTreeError(
            f"Parameter declaration at line {declaration.line} does not end in a name"
        )
    return name_node.text


# Scoped collection utilities

def collect_raise_statements(clause: SyntaxNode) -> List[SyntaxNode]:
    """
    Raise statements owned by this clause.

    Does not enter the clause's own parameter declaration or any nested
    try block; raises in there belong to an inner clause.
    """
    return list(walk_scoped(clause, is_kind(NodeKind.RAISE_STATEMENT), SCOPE_BOUNDARIES))


def collect_identifiers(
    node: SyntaxNode,
    boundaries: FrozenSet[NodeKind] = SCOPE_BOUNDARIES,
) -> List[SyntaxNode]:
    """All identifier nodes below `node`, in document order."""
    return list(walk_scoped(node, is_kind(NodeKind.IDENTIFIER), boundaries))


def clause_identifiers(clause: SyntaxNode) -> List[SyntaxNode]:
    """
    Identifiers used in the clause body.

    Skips the clause's own parameter declaration at the entry point only;
    parameter declarations deeper in the body (lambdas, nested defs) are
    walked. Nested try blocks are still a boundary.
    """
    own_declaration = parameter_declaration(clause)

    identifiers = []
    for child in clause.children:
        if child is own_declaration:
            continue
        if child.kind is NodeKind.IDENTIFIER:
            identifiers.append(child)
        if child.kind in NESTED_TRY_BOUNDARY:
            continue
        identifiers.extend(collect_identifiers(child, NESTED_TRY_BOUNDARY))
    return identifiers


def is_member_access_operand(node: SyntaxNode) -> bool:
    """True if the node sits directly under a member access (`e.args`, `x.e`)."""
    return node.parent is not None and node.parent.kind is NodeKind.MEMBER_ACCESS
