"""
Unit tests for chaincheck.warnings (finding gating).

Structure mirrors the pipeline:
    1. Deduplication
    2. Ranking (sort order)
    3. Cap
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from chaincheck.reporting import Finding
from chaincheck.warnings import gate_findings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _finding(path="a.py", line=1, column=0, detector="hidden_cause", name="e"):
    """Factory: produce a Finding with sane defaults, override what you need."""
    return Finding(
        path=path,
        line=line,
        column=column,
        detector=detector,
        message_key="avoid.hiding.cause.exception",
        args=(name,),
    )


class TestDeduplication:

    def test_identical_findings_collapse(self):
        findings = [_finding(), _finding()]
        assert gate_findings(findings) == [_finding()]

    def test_different_lines_are_kept(self):
        findings = [_finding(line=1), _finding(line=2)]
        assert len(gate_findings(findings)) == 2

    def test_empty_input_returns_empty(self):
        assert gate_findings([]) == []


class TestRanking:

    def test_sorted_by_path_then_position(self):
        findings = [
            _finding(path="b.py", line=1),
            _finding(path="a.py", line=9),
            _finding(path="a.py", line=2, column=8),
            _finding(path="a.py", line=2, column=4),
        ]
        ranked = gate_findings(findings)
        assert [(f.path, f.line, f.column) for f in ranked] == [
            ("a.py", 2, 4),
            ("a.py", 2, 8),
            ("a.py", 9, 0),
            ("b.py", 1, 0),
        ]


class TestCap:

    def test_no_cap_by_default(self):
        findings = [_finding(line=n) for n in range(1, 51)]
        assert len(gate_findings(findings)) == 50

    def test_cap_keeps_first_ranked(self):
        findings = [_finding(line=n) for n in (5, 3, 1)]
        capped = gate_findings(findings, max_findings=2)
        assert [f.line for f in capped] == [1, 3]

    def test_zero_cap(self):
        assert gate_findings([_finding()], max_findings=0) == []


def run_all_tests():
    print("Running finding gating tests...\n")

    suites = [
        ("Dedup",   TestDeduplication),
        ("Ranking", TestRanking),
        ("Cap",     TestCap),
    ]

    passed = 0
    failed = 0

    for suite_name, cls in suites:
        instance = cls()
        methods = [m for m in dir(instance) if m.startswith("test_")]
        for method_name in sorted(methods):
            label = f"{suite_name}.{method_name}"
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
