"""Ignore-pattern matching for tracked paths.

Single source of truth for path exclusion used by:
- FileSystemTraversal (pruning directories during the walk)
- Reconciler (dropping anything a traversal returns that is ignored)
- TreeWatcher (filtering raw filesystem notifications)

Patterns are regular expressions searched (unanchored) against the
root-relative, forward-slash form of a path. A path is ignored when ANY
pattern matches.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from filetrack.core.errors import ConfigError

logger = structlog.get_logger()

Pattern = str | re.Pattern[str]


def compile_pattern(pattern: Pattern, *, field: str = "pattern") -> re.Pattern[str]:
    """Compile a string pattern; compiled patterns pass through unchanged.

    Raises:
        ConfigError: If ``pattern`` is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError.invalid_value(field, pattern, str(e)) from e


class IgnoreFilter:
    """Ordered, append-only list of ignore patterns.

    The list can be extended while the owning tracker is being configured.
    ``freeze()`` makes it read-only; reconciliation only ever reads it.

    Example:
        ignore = IgnoreFilter([r"^\\.git(/|$)", r"~$"])
        ignore.is_ignored(".git/config")  # True
        ignore.is_ignored("notes.txt~")   # True
        ignore.is_ignored("src/app.py")   # False
    """

    def __init__(self, patterns: Iterable[Pattern] = ()) -> None:
        self._patterns: list[re.Pattern[str]] = [
            compile_pattern(p, field="ignore_patterns") for p in patterns
        ]
        self._frozen = False

    @property
    def patterns(self) -> tuple[re.Pattern[str], ...]:
        return tuple(self._patterns)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_pattern(self, pattern: Pattern) -> re.Pattern[str]:
        """Append a pattern to the end of the list.

        Raises:
            ConfigError: If the filter is frozen or the pattern does not compile.
        """
        if self._frozen:
            raise ConfigError.frozen("ignore_patterns")
        compiled = compile_pattern(pattern, field="ignore_patterns")
        self._patterns.append(compiled)
        logger.debug("ignore_pattern_added", pattern=compiled.pattern)
        return compiled

    def freeze(self) -> None:
        self._frozen = True

    def is_ignored(self, path: str) -> bool:
        return any(p.search(path) for p in self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)
