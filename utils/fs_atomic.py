from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Union

Pathish = Union[str, Path]

__all__ = ["fsync_dir", "atomic_write_bytes", "atomic_write_text"]


def fsync_dir(dir_path: Pathish) -> None:
    """
    Fsync a directory to persist metadata updates (e.g., renames).
    Safe no-op if the directory doesn't exist, or on Windows where
    directories cannot be opened for fsync.
    """
    d = Path(dir_path)
    if os.name == "nt" or not d.exists():
        return
    fd = os.open(str(d), os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def _write_tmp_and_replace(dst_path: Path, data: bytes) -> None:
    """
    Internal helper:
      - create a temp file in dst directory
      - write data and fsync it
      - os.replace -> dst
      - fsync directory
    """
    dst_dir = dst_path.parent
    dst_dir.mkdir(parents=True, exist_ok=True)
    tmp_path = dst_dir / f".{dst_path.name}.tmp-{os.getpid()}-{uuid.uuid4().hex[:8]}"

    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, dst_path)
        fsync_dir(dst_dir)
    except Exception:
        # Best-effort cleanup, then re-raise
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def atomic_write_bytes(dst: Pathish, data: bytes) -> None:
    """
    Atomically write bytes to dst path (same-dir temp + replace + fsync).
    """
    _write_tmp_and_replace(Path(dst), data)


def atomic_write_text(dst: Pathish, text: str, encoding: str = "utf-8") -> None:
    atomic_write_bytes(dst, text.encode(encoding))
