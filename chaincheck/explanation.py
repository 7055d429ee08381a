"""
Explanation Layer

Translate Findings to human-readable text or JSON.
Templates are keyed by the message key a detector reports.
"""
import json
from typing import Dict, List

from .reporting import Finding

_TEMPLATES: Dict[str, str] = {
    "avoid.hiding.cause.exception": (
        "Cause exception '{0}' is lost: raise a new exception with "
        "'from {0}' or pass '{0}' to it."
    ),
}

_TEMPLATE_FALLBACK = "{key}: {args}"


def render_message(finding: Finding) -> str:
    template = _TEMPLATES.get(finding.message_key)
    if template is None:
        return _TEMPLATE_FALLBACK.format(
            key=finding.message_key,
            args=", ".join(finding.args),
        )
    return template.format(*finding.args)


def format_text(findings: List[Finding]) -> str:
    return "\n".join(
        f"{f.location()}: {f.detector} {render_message(f)}"
        for f in findings
    )


def format_json(findings: List[Finding]) -> str:
    records = [
        {
            "path":        f.path,
            "line":        f.line,
            "column":      f.column + 1,
            "detector":    f.detector,
            "message_key": f.message_key,
            "args":        list(f.args),
            "message":     render_message(f),
        }
        for f in findings
    ]
    return json.dumps(records, indent=2)
