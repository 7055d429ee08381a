"""
Run configuration.

All knobs come from the command line; defaults live here.
"""
import argparse
from dataclasses import dataclass
from typing import FrozenSet, Optional

OUTPUT_FORMATS = ("text", "json")
DEFAULT_FORMAT = "text"
DEFAULT_BASE_REF = "HEAD"

# Directory names never analyzed; names starting with "." are skipped too
DEFAULT_EXCLUDE: FrozenSet[str] = frozenset({"venv", "__pycache__"})


@dataclass(frozen=True)
class Config:
    exclude:       FrozenSet[str] = DEFAULT_EXCLUDE
    max_findings:  Optional[int] = None
    output_format: str = DEFAULT_FORMAT
    changed_only:  bool = False
    base_ref:      str = DEFAULT_BASE_REF

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {self.output_format}")
        if self.max_findings is not None and self.max_findings < 0:
            raise ValueError("max_findings must not be negative")

    def is_excluded(self, part: str) -> bool:
        return part.startswith(".") or part in self.exclude

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        return cls(
            exclude=DEFAULT_EXCLUDE | frozenset(args.exclude or ()),
            max_findings=args.max_findings,
            output_format=args.format,
            changed_only=args.changed,
            base_ref=args.base_ref,
        )
