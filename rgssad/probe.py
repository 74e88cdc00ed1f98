from __future__ import annotations

import os
import sys
from typing import BinaryIO, Optional

from .binutil import read_bounded_string
from .constants import (
    ENGINE_EXTENSIONS,
    ENGINE_NAMES,
    ENGINE_REVISIONS,
    ENGINE_UNKNOWN,
    MAGIC_FIELD_LEN,
    REVISION_UNKNOWN,
    RGSSAD_MAGIC,
    SUPPORTED_REVISIONS,
)
from .errors import InvalidArchive, MalformedStream


def detect_version(f: BinaryIO) -> int:
    """Validate the signature and return the revision byte.

    Returns ``REVISION_UNKNOWN`` when the signature matches but the revision
    is not supported. The stream is always left at offset 0.

    Raises:
        InvalidArchive: the stream does not start with the RGSSAD signature.
    """
    f.seek(0)
    try:
        try:
            header = read_bounded_string(f, MAGIC_FIELD_LEN)
        except MalformedStream:
            raise InvalidArchive("Archive is in invalid format") from None
        if header != RGSSAD_MAGIC:
            raise InvalidArchive("signature mismatch")
        raw = f.read(1)
        if len(raw) != 1:
            return REVISION_UNKNOWN
        revision = raw[0]
        if revision not in SUPPORTED_REVISIONS:
            return REVISION_UNKNOWN
        return revision
    finally:
        f.seek(0)


def version_from_extension(path: str) -> str:
    """Classify an archive by extension alone; the file is never opened."""
    if not os.path.isfile(path):
        return ENGINE_UNKNOWN
    ext = os.path.splitext(path)[1].lower()
    return ENGINE_EXTENSIONS.get(ext, ENGINE_UNKNOWN)


def revision_for_engine(engine: str) -> int:
    return ENGINE_REVISIONS.get(engine, REVISION_UNKNOWN)


def resolve_revision(f: BinaryIO, path: Optional[str] = None) -> int:
    """Detect the revision from content, cross-checked against the extension.

    Content wins on disagreement; the mismatch is only reported as a warning.
    """
    revision = detect_version(f)
    if path is None:
        return revision
    engine = version_from_extension(path)
    hinted = revision_for_engine(engine)
    if hinted != REVISION_UNKNOWN and revision != REVISION_UNKNOWN and hinted != revision:
        print(
            f"Warning: {os.path.basename(path)} looks like {ENGINE_NAMES[engine]} by extension "
            f"but contains revision {revision}; using revision {revision}",
            file=sys.stderr,
        )
    return revision
