from typing import Callable, List, Sequence
import logging
from pathlib import Path

import pathspec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern, GitWildMatchPatternError


##################################################################################################
# Ignore patterns
##################################################################################################

PatternErrorHandler = Callable[[str, Exception], None]


class PathMatcher:
    """
    Matches paths under `base_path` against gitignore-style patterns.

    Patterns are compiled one at a time so that a malformed pattern is reported
    through `on_error` and dropped without affecting the others. Evaluation
    follows gitignore rules: the last pattern that matches a path decides, so a
    later `!pattern` re-includes what an earlier pattern excluded.
    """
    def __init__(self, base_path: Path, patterns: Sequence[str], on_error: PatternErrorHandler | None = None):
        self.base_path = base_path
        self.patterns = list(patterns)

        compiled: List[GitWildMatchPattern] = []
        for line in self.patterns:
            try:
                compiled.append(GitWildMatchPattern(line))
            except GitWildMatchPatternError as e:
                logging.warning(f"Ignoring invalid pattern {line!r}: {e}")
                if on_error is not None:
                    on_error(line, e)

        # GitIgnoreSpec keeps git's rule that a negated directory does not
        # re-include files an earlier pattern matched directly
        self.path_spec = pathspec.GitIgnoreSpec(compiled)

    def relative(self, path: Path | str) -> str | None:
        """
        Returns `path` as a posix path relative to the base path, or None when
        it lies outside of it.
        """
        path = Path(path)
        if not path.is_absolute():
            return path.as_posix()
        try:
            return path.relative_to(self.base_path.absolute()).as_posix()
        except ValueError:
            return None

    def matches(self, path: Path | str, is_dir: bool = False) -> bool:
        rel_path = self.relative(path)
        if rel_path is None or rel_path in ("", "."):
            return False

        # Directory-only patterns ("build/") only match paths ending in a separator
        if is_dir and not rel_path.endswith("/"):
            rel_path += "/"

        return self.path_spec.match_file(rel_path)
