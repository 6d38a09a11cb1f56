"""
License header policy: every source file selected by suffix must start with
the configured header, byte for byte.

Files are selected in three steps. Paths matching one of the gitignore-style
`skip_paths` are never visited (a matching directory prunes its whole
subtree). Of the remaining regular files, names ending in one of the
`exclude_suffixes` are skipped, and names ending in one of the
`include_suffixes` are checked.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple
from pathlib import Path
import logging
import os
import stat

from conform.checks.base import Issue, IssueList, IssueType
from conform.ignore import PathMatcher
from conform.policy import Check, Options, Policy, Report


E_HEADER_NOT_DEFINED   = IssueType("59e89159-c7ca-4395-9bed-62a86696467b", "Header is not defined")
E_MISSING_HEADER       = IssueType("36a8e85a-bf83-438f-a251-2cb7dbdc4353", "File {path} does not contain a license header")
E_READ_FAILED          = IssueType("1b320795-3abc-432d-8c12-1f39bb56c77e", "Failed to open {path}")
E_WALK_FAILED          = IssueType("1ac3b596-10df-47da-8866-a29509eb089d", "Failed to walk directory: {reason}")
E_INVALID_SKIP_PATTERN = IssueType("eb65d294-11dd-4a18-8503-4bd28f70f8cd", "Invalid skip pattern {pattern!r}: {reason}")


@dataclass(frozen=True)
class SuffixFilter:
    """
    Selects files by name. Exclusions take precedence over inclusions.
    """
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()

    def applies(self, name: str) -> bool:
        if any(name.endswith(suffix) for suffix in self.exclude):
            return False
        return any(name.endswith(suffix) for suffix in self.include)


class HeaderCheck(Check):
    """
    Collects the files without a valid license header.
    """
    def __init__(self) -> None:
        self._issues = IssueList()

    def name(self) -> str:
        return "File Header"

    def add_violation(self, issue: Issue) -> None:
        self._issues.append(issue)

    def count(self) -> int:
        return len(self._issues)

    def message(self) -> str:
        if self.count() != 0:
            return f"Found {self.count()} files without license header"
        return "All files have a valid license header"

    def errors(self) -> List[Issue]:
        return list(self._issues)

    summary = message
    violations = errors


@dataclass
class License(Policy):
    """
    Enforces a license header on source files.
    """
    skip_paths: List[str] = field(default_factory=list)
    include_suffixes: List[str] = field(default_factory=list)
    exclude_suffixes: List[str] = field(default_factory=list)
    header: str = ""

    @property
    def suffix_filter(self) -> SuffixFilter:
        return SuffixFilter(tuple(self.include_suffixes), tuple(self.exclude_suffixes))

    def compliance(self, options: Options) -> Report:
        report = Report()
        report.add_check(self.validate_license_header(options.root))
        return report

    def validate_license_header(self, root: Path = Path(".")) -> HeaderCheck:
        check = HeaderCheck()

        if not self.header:
            check.add_violation(E_HEADER_NOT_DEFINED.make())
            return check

        def on_pattern_error(pattern: str, e: Exception) -> None:
            check.add_violation(E_INVALID_SKIP_PATTERN.make(pattern=pattern, reason=e))

        matcher = PathMatcher(root, self.skip_paths, on_error=on_pattern_error)
        suffix_filter = self.suffix_filter
        value = self.header.encode("utf-8")

        try:
            for path in self._walk(root, matcher):
                if not suffix_filter.applies(path.name):
                    continue

                try:
                    with open(path, 'rb') as f:
                        contents = f.read()
                except OSError as e:
                    logging.warning(f"Failed to read {path}: {e}")
                    check.add_violation(E_READ_FAILED.at(path))
                    continue

                if contents.startswith(value):
                    continue

                check.add_violation(E_MISSING_HEADER.at(path))
        except OSError as e:
            logging.warning(f"Failed to walk {root}: {e}")
            check.add_violation(E_WALK_FAILED.make(reason=e))

        return check

    def _walk(self, root: Path, matcher: PathMatcher) -> Iterator[Path]:
        """
        Yields the regular files under `root` that are not skipped, depth first
        and in name order. Errors listing a directory propagate to the caller.
        """
        if not root.is_dir():
            # stat() raises for a missing root
            if stat.S_ISREG(root.stat().st_mode):
                yield root
            return

        def go(directory: Path, rel: str) -> Iterator[Path]:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)

            for entry in entries:
                rel_path = f"{rel}{entry.name}"
                path = directory / entry.name

                if entry.is_dir(follow_symlinks=False):
                    if matcher.matches(rel_path, is_dir=True):
                        logging.debug(f"Skipping directory {path}")
                        continue
                    yield from go(path, rel_path + "/")

                elif entry.is_file(follow_symlinks=False):
                    if matcher.matches(rel_path):
                        logging.debug(f"Skipping {path}")
                        continue
                    yield path

        yield from go(root, "")
