"""
Unit tests for chaincheck.frontend (Python source -> SyntaxNode tree).
"""
import sys
import textwrap
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from chaincheck.frontend import build_tree
from chaincheck.syntax import NodeKind, is_kind, walk_scoped


def parse_code(code: str):
    return build_tree(textwrap.dedent(code))


def find_all(root, kind):
    return list(walk_scoped(root, is_kind(kind), boundaries=frozenset()))


def _kinds(nodes):
    return [n.kind for n in nodes]


class TestFrontEnd:

    def test_module_root(self):
        root = parse_code("x = 1\n")
        assert root.kind is NodeKind.OTHER
        assert root.text == "Module"
        assert root.parent is None

    def test_named_handler_becomes_catch_clause(self):
        root = parse_code("""
            try:
                risky()
            except ValueError as err:
                pass
        """)
        clauses = find_all(root, NodeKind.CATCH_CLAUSE)
        assert len(clauses) == 1

        clause = clauses[0]
        assert clause.line == 4
        assert clause.parent.kind is NodeKind.TRY_BLOCK
        assert _kinds(clause.children) == [NodeKind.PARAMETER_DECLARATION, NodeKind.OTHER]

        declaration = clause.children[0]
        assert [(c.kind, c.text) for c in declaration.children] == [
            (NodeKind.IDENTIFIER, "ValueError"),
            (NodeKind.IDENTIFIER, "err"),
        ]

    def test_tuple_of_exception_types(self):
        root = parse_code("""
            try:
                risky()
            except (KeyError, IndexError) as err:
                pass
        """)
        declaration = find_all(root, NodeKind.PARAMETER_DECLARATION)[0]
        assert declaration.last_child().text == "err"
        assert declaration.children[0].kind is NodeKind.OTHER

    def test_unnamed_handler_is_not_a_clause(self):
        root = parse_code("""
            try:
                risky()
            except ValueError:
                raise RuntimeError()
        """)
        assert find_all(root, NodeKind.CATCH_CLAUSE) == []
        assert len(find_all(root, NodeKind.RAISE_STATEMENT)) == 1

    def test_except_star(self):
        root = parse_code("""
            try:
                risky()
            except* ValueError as group:
                pass
        """)
        assert len(find_all(root, NodeKind.TRY_BLOCK)) == 1
        assert len(find_all(root, NodeKind.CATCH_CLAUSE)) == 1

    def test_bare_raise_is_not_a_raise_statement(self):
        root = parse_code("""
            try:
                risky()
            except ValueError as err:
                raise
        """)
        assert find_all(root, NodeKind.RAISE_STATEMENT) == []

    def test_raise_with_cause(self):
        root = parse_code("raise RuntimeError('x') from err\n")
        statement = find_all(root, NodeKind.RAISE_STATEMENT)[0]
        assert statement.line == 1
        assert _kinds(statement.children) == [NodeKind.OTHER, NodeKind.IDENTIFIER]
        assert statement.children[1].text == "err"

    def test_attribute_is_member_access(self):
        root = parse_code("err.args\n")
        access = find_all(root, NodeKind.MEMBER_ACCESS)[0]
        assert [(c.kind, c.text) for c in access.children] == [
            (NodeKind.IDENTIFIER, "err"),
            (NodeKind.IDENTIFIER, "args"),
        ]

    def test_assignments(self):
        root = parse_code("""
            a = b
            c += d
            if (f := g):
                pass
        """)
        assignments = find_all(root, NodeKind.ASSIGNMENT)
        assert len(assignments) == 2
        for assignment in assignments:
            assert assignment.children[0].kind is NodeKind.IDENTIFIER

    def test_chained_assignment_keeps_value_last(self):
        root = parse_code("a = b = c\n")
        assignment = find_all(root, NodeKind.ASSIGNMENT)[0]
        assert [child.text for child in assignment.children] == ["a", "b", "c"]
        assert assignment.last_child().text == "c"

    def test_augmented_assignment_is_other(self):
        root = parse_code("c += d\n")
        statement = root.children[0]
        assert statement.kind is NodeKind.OTHER
        assert statement.text == "AugAssign"
        assert find_all(root, NodeKind.ASSIGNMENT) == []

    def test_annotated_assignment_is_declaration(self):
        root = parse_code("wrapped: RuntimeError = RuntimeError(err)\n")
        declaration = find_all(root, NodeKind.VARIABLE_DECLARATION)[0]
        assert _kinds(declaration.children) == [
            NodeKind.IDENTIFIER,
            NodeKind.OTHER,
            NodeKind.ASSIGNMENT,
        ]
        assert declaration.children[0].text == "wrapped"
        assert declaration.children[1].text == "annotation"

    def test_annotation_without_value(self):
        root = parse_code("wrapped: RuntimeError\n")
        declaration = find_all(root, NodeKind.VARIABLE_DECLARATION)[0]
        assert find_all(declaration, NodeKind.ASSIGNMENT) == []

    def test_function_arguments_are_parameter_declaration(self):
        root = parse_code("def handler(err, *, retries: int = 3):\n    pass\n")
        declaration = find_all(root, NodeKind.PARAMETER_DECLARATION)[0]
        names = [n.text for n in find_all(declaration, NodeKind.IDENTIFIER)]
        assert names == ["err", "retries", "int"]

    def test_expression_context_is_dropped(self):
        root = parse_code("x = y\n")
        for identifier in find_all(root, NodeKind.IDENTIFIER):
            assert identifier.children == []

    def test_parent_links(self):
        root = parse_code("raise RuntimeError(err)\n")
        for node in walk_scoped(root, lambda n: True, boundaries=frozenset()):
            assert node in node.parent.children

    def test_syntax_error_propagates(self):
        try:
            build_tree("def broken(:\n")
            assert False, "Expected SyntaxError"
        except SyntaxError:
            pass


def run_all_tests():
    print("Running front end tests...\n")

    instance = TestFrontEnd()
    methods = [m for m in dir(instance) if m.startswith("test_")]

    passed = 0
    failed = 0

    for method_name in sorted(methods):
        label = f"FrontEnd.{method_name}"
        try:
            getattr(instance, method_name)()
            print(f"  ✓ {label}")
            passed += 1
        except Exception as e:
            print(f"  ✗ {label}")
            print(f"      {e}")
            failed += 1

    print(f"\n{'✅' if failed == 0 else '❌'} {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
