"""Atomic file writes and output path validation for generated files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


# ------------------------------------------------------------------
# Path validation (security — path traversal prevention)
# ------------------------------------------------------------------


def validate_output_dir(output: str | Path, allowed_base: Path) -> Path:
    """Normalize and validate an output directory.

    Security model:
    - Absolute paths are accepted as-is (user explicitly chose the location).
    - Relative paths are confined to *allowed_base*.
      Traversal sequences like '../../etc' are hard-blocked.
    - The result may never be *allowed_base* itself: that would overwrite the
      sources being read.

    Returns:
        Resolved absolute Path.

    Raises:
        ValueError: If a relative path escapes *allowed_base*, or the output
            directory is *allowed_base*.
    """
    base = allowed_base.resolve()
    path = Path(output)
    resolved = path.resolve() if path.is_absolute() else (base / path).resolve()

    if resolved == base:
        raise ValueError(
            f"Output directory '{output}' is the project root. "
            "Rewritten sources would replace the originals."
        )
    if path.is_absolute():
        return resolved

    try:
        resolved.relative_to(base)
    except ValueError:
        raise ValueError(
            f"Output path '{output}' resolves outside the allowed directory "
            f"('{base}'). Path traversal is not permitted."
        )

    return resolved


# ------------------------------------------------------------------
# Atomic write
# ------------------------------------------------------------------


def _target_mode(path: Path) -> int:
    """Mode for *path*: keep an existing file's, else 0o666 minus the umask."""
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(path: Path, content: str) -> None:
    """Write *content* to *path* atomically (temp → rename).

    Creates parent directories if needed. Existing content is replaced.
    A new file gets the umask-derived mode a plain open() would give it;
    an existing file keeps its mode.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
