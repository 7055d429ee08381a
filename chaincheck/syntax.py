"""
Syntax Tree Model

Language-neutral view of a parsed module.
Detectors only read this tree; the front end builds it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Iterator, List, Optional


class NodeKind(Enum):
    CATCH_CLAUSE          = "catch-clause"
    PARAMETER_DECLARATION = "parameter-declaration"
    RAISE_STATEMENT       = "raise-statement"
    TRY_BLOCK             = "try-block"
    IDENTIFIER            = "identifier"
    ASSIGNMENT            = "assignment"
    VARIABLE_DECLARATION  = "variable-declaration"
    MEMBER_ACCESS         = "member-access"
    OTHER                 = "other"


# Kinds a scoped walk never descends into
PARAMETER_BOUNDARY: FrozenSet[NodeKind] = frozenset({NodeKind.PARAMETER_DECLARATION})
NESTED_TRY_BOUNDARY: FrozenSet[NodeKind] = frozenset({NodeKind.TRY_BLOCK})
SCOPE_BOUNDARIES: FrozenSet[NodeKind] = PARAMETER_BOUNDARY | NESTED_TRY_BOUNDARY


class MalformedTreeError(ValueError):
    """The tree breaks a structural rule the producer promised to keep."""


@dataclass(eq=False)
class SyntaxNode:
    """
    One node of the tree.

    Identity-compared: two nodes are equal only if they are the same node.
    `parent` is a back-reference and is excluded from repr.
    """
    kind: NodeKind
    text: str = ""
    line: int = 0
    column: int = 0
    parent: Optional["SyntaxNode"] = field(default=None, repr=False)
    children: List["SyntaxNode"] = field(default_factory=list, repr=False)

    @property
    def depth(self) -> int:
        """Number of ancestors above this node."""
        count = 0
        current = self.parent
        while current is not None:
            count += 1
            current = current.parent
        return count

    def add_child(self, child: "SyntaxNode") -> "SyntaxNode":
        child.parent = self
        self.children.append(child)
        return child

    def first_child(self, kind: NodeKind) -> Optional["SyntaxNode"]:
        for child in iter_children(self):
            if child.kind is kind:
                return child
        return None

    def last_child(self) -> Optional["SyntaxNode"]:
        return self.children[-1] if self.children else None


def iter_children(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """Direct children in source order. A fresh iterator on every call."""
    return iter(tuple(node.children))


def walk_scoped(
    root: SyntaxNode,
    collect: Callable[[SyntaxNode], bool],
    boundaries: FrozenSet[NodeKind] = SCOPE_BOUNDARIES,
) -> Iterator[SyntaxNode]:
    """
    Pre-order walk over the descendants of `root`.

    A node is tested against `collect` before the descent decision, so a
    boundary node can still be yielded; its subtree is never visited.
    Yields in document order. `root` itself is not tested.
    """
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if collect(node):
            yield node
        if node.kind in boundaries:
            continue
        stack.extend(reversed(node.children))


def ancestors(node: SyntaxNode, stop: Optional[SyntaxNode] = None) -> Iterator[SyntaxNode]:
    """
    Walk parent references upward, nearest first.

    Stops after yielding `stop`, at the tree root, or after `node.depth`
    steps, whichever comes first.
    """
    current = node
    for _ in range(node.depth):
        current = current.parent
        if current is None:
            return
        yield current
        if current is stop:
            return


def is_kind(kind: NodeKind) -> Callable[[SyntaxNode], bool]:
    """Predicate factory for `walk_scoped`."""
    def predicate(node: SyntaxNode) -> bool:
        return node.kind is kind
    return predicate
