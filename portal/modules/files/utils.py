"""Pure helpers for file records: storage paths, client-side search and size labels."""
import os
import time
from typing import Optional, Sequence, List, TypeVar

T = TypeVar("T")

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def build_storage_path(workspace_id: str, file_name: str, now_ns: Optional[int] = None) -> str:
    """Blob path ``{workspace_id}/{epoch_nanos}{.ext}`` for a new upload.

    The extension is the original one, lower-cased; names without one get no suffix.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    extension = os.path.splitext(file_name)[1].lower()
    return f"{workspace_id}/{now_ns}{extension}"


def search_files(files: Sequence[T], term: Optional[str]) -> List[T]:
    """Case-insensitive substring match on file_name over an already fetched list."""
    if not term:
        return list(files)
    needle = term.lower()
    return [f for f in files if needle in f.file_name.lower()]


def format_file_size(size: Optional[int]) -> str:
    if size is None:
        return "Unknown"
    if size <= 0:
        return "0 Bytes"
    i = 0
    while i < len(SIZE_UNITS) - 1 and size >= 1024 ** (i + 1):
        i += 1
    value = f"{size / 1024 ** i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[i]}"
