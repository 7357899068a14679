import logging
from pathlib import Path

from docsplice.core.languages import detect_language_from_path, is_candidate_path
from docsplice.core.locator import locate_declaration

logger = logging.getLogger(__name__)


def _walk_files(root: Path) -> list[Path]:
    """Depth-first file listing in directory-entry order; symlinked dirs are not followed."""
    files: list[Path] = []
    pending = [root]
    while pending:
        path = pending.pop()
        if path.is_dir() and (path == root or not path.is_symlink()):
            pending.extend(reversed(list(path.iterdir())))
        else:
            files.append(path)
    return files


def scan_source_files(root: str | Path, suffix: str = ".ts", excluded_suffix: str = ".test.ts") -> list[Path]:
    """Return files under *root* that hold at least one undocumented declaration."""
    root_path = Path(root)
    if not root_path.exists():
        raise FileNotFoundError(f"Path not found: {root}")

    selected: list[Path] = []
    for path in _walk_files(root_path):
        if not is_candidate_path(path, suffix, excluded_suffix):
            continue
        if locate_declaration(path.read_bytes(), language=detect_language_from_path(path)) is None:
            logger.warning("Skipping file %s", path)
            continue
        selected.append(path)
    return selected
