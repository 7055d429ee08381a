"""
Python Front End

Parses Python source with `ast` and converts it into SyntaxNodes.
Children follow AST field order, which matches source order for every
construct the detectors look at.

Mapping:
- Try / TryStar            -> TRY_BLOCK
- ExceptHandler with name  -> CATCH_CLAUSE [PARAMETER_DECLARATION[type?, name], body]
- Raise with exception     -> RAISE_STATEMENT [exc, cause?]
- Name                     -> IDENTIFIER
- arguments                -> PARAMETER_DECLARATION
- Assign / NamedExpr       -> ASSIGNMENT [targets..., value]
- AnnAssign                -> VARIABLE_DECLARATION [target, annotation, ASSIGNMENT[value]?]
- Attribute                -> MEMBER_ACCESS [value, IDENTIFIER(attr)]
- anything else            -> OTHER
"""
import ast
from typing import Optional

from .syntax import NodeKind, SyntaxNode

_TRY_NODES = (ast.Try, ast.TryStar)
_ASSIGN_NODES = (ast.Assign, ast.NamedExpr)


def build_tree(source: str, filename: str = "<unknown>") -> SyntaxNode:
    """Parse `source` and return the root SyntaxNode. Raises SyntaxError."""
    module = ast.parse(source, filename=filename)
    return convert(module)


def convert(node: ast.AST, parent: Optional[SyntaxNode] = None) -> SyntaxNode:
    """Convert an AST subtree. Attaches the result to `parent` if given."""
    result = _make_node(node, parent)
    if parent is not None:
        parent.add_child(result)
    _fill_children(node, result)
    return result


def _position(node: ast.AST, fallback: Optional[SyntaxNode]) -> tuple[int, int]:
    line = getattr(node, "lineno", None)
    if line is None:
        if fallback is None:
            return 0, 0
        return fallback.line, fallback.column
    return line, getattr(node, "col_offset", 0)


def _make_node(node: ast.AST, parent: Optional[SyntaxNode]) -> SyntaxNode:
    line, column = _position(node, parent)

    if isinstance(node, _TRY_NODES):
        kind = NodeKind.TRY_BLOCK
    elif isinstance(node, ast.ExceptHandler) and node.name:
        kind = NodeKind.CATCH_CLAUSE
    elif isinstance(node, ast.Raise) and node.exc is not None:
        kind = NodeKind.RAISE_STATEMENT
    elif isinstance(node, ast.Name):
        return SyntaxNode(NodeKind.IDENTIFIER, node.id, line, column)
    elif isinstance(node, ast.arguments):
        kind = NodeKind.PARAMETER_DECLARATION
    elif isinstance(node, _ASSIGN_NODES):
        kind = NodeKind.ASSIGNMENT
    elif isinstance(node, ast.AnnAssign):
        kind = NodeKind.VARIABLE_DECLARATION
    elif isinstance(node, ast.Attribute):
        kind = NodeKind.MEMBER_ACCESS
    else:
        kind = NodeKind.OTHER

    return SyntaxNode(kind, type(node).__name__, line, column)


def _synthetic(kind: NodeKind, text: str, parent: SyntaxNode) -> SyntaxNode:
    """Node with no AST counterpart, positioned at its parent."""
    return parent.add_child(SyntaxNode(kind, text, parent.line, parent.column))


def _fill_children(node: ast.AST, result: SyntaxNode) -> None:
    if result.kind is NodeKind.CATCH_CLAUSE:
        _fill_catch_clause(node, result)
    elif result.kind is NodeKind.VARIABLE_DECLARATION:
        _fill_declaration(node, result)
    elif result.kind is NodeKind.MEMBER_ACCESS:
        convert(node.value, result)
        _synthetic(NodeKind.IDENTIFIER, node.attr, result)
    elif isinstance(node, ast.arg):
        _synthetic(NodeKind.IDENTIFIER, node.arg, result)
        if node.annotation is not None:
            convert(node.annotation, result)
    else:
        for child in ast.iter_child_nodes(node):
            if isinstance(child, ast.expr_context):
                continue
            convert(child, result)


def _fill_catch_clause(handler: ast.ExceptHandler, clause: SyntaxNode) -> None:
    declaration = _synthetic(NodeKind.PARAMETER_DECLARATION, "except", clause)
    if handler.type is not None:
        convert(handler.type, declaration)
    _synthetic(NodeKind.IDENTIFIER, handler.name, declaration)

    body = _synthetic(NodeKind.OTHER, "body", clause)
    for statement in handler.body:
        convert(statement, body)


def _fill_declaration(node: ast.AnnAssign, declaration: SyntaxNode) -> None:
    convert(node.target, declaration)

    annotation = _synthetic(NodeKind.OTHER, "annotation", declaration)
    convert(node.annotation, annotation)

    if node.value is not None:
        initializer = _synthetic(NodeKind.ASSIGNMENT, "=", declaration)
        convert(node.value, initializer)
