"""
Alias tracking for caught exceptions.

Finds local names that hold the caught exception, or a new exception
built from it, through one assignment. Only direct uses of the caught
name are followed; aliases of aliases are not.
"""
from typing import List, Optional

from ..syntax import NodeKind, SyntaxNode, ancestors
from .utils import clause_identifiers, is_member_access_operand


def _assigned_value_of(occurrence: SyntaxNode, clause: SyntaxNode) -> Optional[SyntaxNode]:
    """
    Nearest assignment above the occurrence, not looking past the clause.

    Returned only when the occurrence is on the value side; an occurrence
    inside a target (`x = e = v`, `d[e] = v`) yields None.
    """
    branch = occurrence
    for ancestor in ancestors(occurrence, stop=clause):
        if ancestor is clause:
            return None
        if ancestor.kind is NodeKind.ASSIGNMENT:
            if branch is ancestor.last_child():
                return ancestor
            return None
        branch = ancestor
    return None


def _assignment_targets(assignment: SyntaxNode) -> List[SyntaxNode]:
    """
    Names receiving the assigned value.

    An initializer of a variable declaration assigns to the declared name;
    a plain assignment assigns to every direct identifier before its value.
    Attribute and subscript targets are not names.
    """
    owner = assignment.parent
    if owner is not None and owner.kind is NodeKind.VARIABLE_DECLARATION:
        declared = owner.first_child(NodeKind.IDENTIFIER)
        return [declared] if declared is not None else []
    return [
        target for target in assignment.children[:-1]
        if target.kind is NodeKind.IDENTIFIER
    ]


def track_aliases(clause: SyntaxNode, original: str) -> List[str]:
    """
    Names assigned from the caught exception inside `clause`.

    Returns newly discovered names in document order; `original` itself
    is never included.
    """
    aliases: List[str] = []

    for occurrence in clause_identifiers(clause):
        if occurrence.text != original:
            continue
        if is_member_access_operand(occurrence):
            continue

        assignment = _assigned_value_of(occurrence, clause)
        if assignment is None:
            continue

        for target in _assignment_targets(assignment):
            name = target.text
            if name != original and name not in aliases:
                aliases.append(name)

    return aliases
