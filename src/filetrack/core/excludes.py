"""Canonical ignore patterns.

Patterns are regular expressions searched against root-relative,
forward-slash paths (``src/app.py``, never ``./src/app.py``). A path is
ignored when ANY pattern matches. Directory rules use ``(/|$)`` so that they
match both the directory itself (which prunes traversal) and everything
beneath it.

The build-output rule is not part of the defaults: it depends on the
configured build directory and is appended by the tracker when it starts
(see ``build_dir_pattern``).
"""

from __future__ import annotations

import re

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    # -------------------------------------------------------------------------
    # Executables and dependency/vendor directories
    # -------------------------------------------------------------------------
    r"^bin(/|$)",
    r"^\.bundle(/|$)",
    r"^vendor(/|$)",
    r"^node_modules(/|$)",
    # -------------------------------------------------------------------------
    # Hidden cache directories
    # -------------------------------------------------------------------------
    r"^\.sass-cache(/|$)",
    r"^\.cache(/|$)",
    # -------------------------------------------------------------------------
    # Version control
    # -------------------------------------------------------------------------
    r"^\.git(/|$)",
    r"^\.gitignore$",
    # -------------------------------------------------------------------------
    # OS metadata
    # -------------------------------------------------------------------------
    r"\.DS_Store",
    # -------------------------------------------------------------------------
    # Toolchain and lock files
    # -------------------------------------------------------------------------
    r"^\.rbenv-.*$",
    r"^Gemfile$",
    r"^Gemfile\.lock$",
    # -------------------------------------------------------------------------
    # Editor swap/backup files: trailing ~, emacs #autosave# and .#lock
    # -------------------------------------------------------------------------
    r"~$",
    r"(^|/)\.?#",
    # -------------------------------------------------------------------------
    # Scratch space
    # -------------------------------------------------------------------------
    r"^tmp/",
)

DEFAULT_BUILD_DIR = "build"


def build_dir_pattern(build_dir: str) -> str:
    """Return the ignore rule for the configured build-output directory.

    ``build_dir`` is taken literally (escaped), relative to the project root.
    Leading ``./`` and trailing slashes are stripped.
    """
    normalized = build_dir.strip().replace("\\", "/").strip("/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return rf"^{re.escape(normalized)}(/|$)"


__all__ = [
    "DEFAULT_BUILD_DIR",
    "DEFAULT_IGNORE_PATTERNS",
    "build_dir_pattern",
]
