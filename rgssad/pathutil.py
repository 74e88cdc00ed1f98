from __future__ import annotations

import os
from typing import List

from .constants import ARCHIVE_SEP
from .errors import CorruptArchive


def norm_entry_path(name: str) -> List[str]:
    """Split an archive entry name into safe relative path segments.

    Rules:
    - Convert backslashes to slashes
    - Strip leading/trailing slashes
    - Remove empty and '.' segments
    - Reject '..' segments, drive or stream colons, and NUL
    - Reject names that normalize to nothing
    """
    p = name.replace(ARCHIVE_SEP, "/").strip("/")
    parts = [q for q in p.split("/") if q not in ("", ".")]
    if not parts:
        raise CorruptArchive("invalid entry path")
    for q in parts:
        if q == ".." or ":" in q or "\x00" in q:
            raise CorruptArchive(f"invalid entry path: {name!r}")
    return parts


def resolve_output_path(output_dir: str, name: str, create_dirs: bool = True) -> str:
    """Map an entry name to a destination under ``output_dir``.

    With ``create_dirs`` false only the leaf name is kept. The resolved path
    must stay inside ``output_dir`` even through symlinked directories.
    """
    parts = norm_entry_path(name)
    rel = os.path.join(*parts) if create_dirs else parts[-1]
    out_path = os.path.join(output_dir, rel)
    root = os.path.realpath(output_dir)
    real = os.path.realpath(out_path)
    if os.path.commonpath([root, real]) != root:
        raise CorruptArchive(f"Entry path escapes output directory: {name!r}")
    return out_path
