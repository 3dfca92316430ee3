from __future__ import annotations

import hashlib
from pathlib import Path


class DataAccessError(Exception):
    pass


def resolve_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Resolve a cutting-sheet relpath under the explicit data_root.

    Absolute paths, drive-qualified Windows paths and `..` escapes are refused;
    callers never get a path outside data_root.
    """

    if relpath.startswith(("/", "\\")) or (":" in relpath and "\\" in relpath):
        raise DataAccessError(f"Expected a relative path under data_root, got: {relpath!r}")

    root = data_root.expanduser().resolve()
    candidate = (root / relpath).resolve()
    if not candidate.is_relative_to(root):
        raise DataAccessError(f"Path traversal or external reference detected: relpath={relpath!r}")

    return candidate


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()
