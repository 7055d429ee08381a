"""
Git working tree inspection.

Handles:
- Repository validation using subprocess (no GitPython dependency)
- Changed files relative to a base ref
- Untracked files not covered by .gitignore

Only used when analysis is limited to changed files.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Tuple

logger = logging.getLogger(__name__)


class GitRepository:
    """Answers questions about a Git working tree."""

    def __init__(self, repo_path: str):
        self.repo_path = Path(repo_path).resolve()

        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            raise ValueError(f"Not a Git repository: {repo_path}")

        self.top_level = Path(result.stdout.strip()).resolve()

    def _run_git(self, args: List[str], check: bool = True) -> Tuple[int, str, str]:
        logger.debug("git %s (in %s)", " ".join(args), self.top_level)
        result = subprocess.run(
            ["git"] + args,
            cwd=self.top_level,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if check and result.returncode != 0:
            raise RuntimeError(
                f"Git command failed: {' '.join(args)}\n{result.stderr}"
            )
        return result.returncode, result.stdout, result.stderr

    def changed_files(self, base_ref: str = "HEAD") -> List[Path]:
        """
        Files changed relative to `base_ref`, plus untracked files.

        Deleted files are left out. Returns absolute paths, sorted.
        """
        _, tracked, _ = self._run_git(
            ["diff", "--name-only", "--diff-filter=d", base_ref, "--"]
        )
        _, untracked, _ = self._run_git(
            ["ls-files", "--others", "--exclude-standard", "--full-name"]
        )

        names = set(tracked.splitlines()) | set(untracked.splitlines())
        paths = [self.top_level / name for name in names if name]
        return sorted(p for p in paths if p.is_file())

    def changed_python_files(self, base_ref: str = "HEAD") -> List[Path]:
        return [p for p in self.changed_files(base_ref) if p.suffix == ".py"]


def changed_python_files(repo_path: str, base_ref: str = "HEAD") -> List[Path]:
    repo = GitRepository(repo_path)
    files = repo.changed_python_files(base_ref)
    logger.debug("%d changed Python file(s) relative to %s", len(files), base_ref)
    return files
