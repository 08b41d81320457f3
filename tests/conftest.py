"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides small filesystem-tree helpers shared by the suites.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local filetrack package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of filetrack modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("filetrack"):
        del sys.modules[module_name]


def write_tree(root: Path, files: list[str]) -> None:
    """Create each root-relative file (and its parents) under ``root``."""
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"content of {rel}\n")


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Return a helper that writes files under tmp_path and returns the root."""

    def _make(files: list[str]) -> Path:
        write_tree(tmp_path, files)
        return tmp_path

    return _make
