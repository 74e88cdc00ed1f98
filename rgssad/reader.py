from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from .binutil import stream_size
from .cipher import KeystreamCipher
from .constants import EXTRACT_CHUNK_SIZE, REVISION_UNKNOWN
from .entries import Entry, EntryProvider, provider_for_revision
from .errors import CorruptArchive, InvalidArchive, TruncatedArchive
from .pathutil import resolve_output_path
from .probe import resolve_revision


EXTRACT_WRITTEN = "written"
EXTRACT_SKIPPED = "skipped"


@dataclass
class ExtractResult:
    entry: Entry
    path: str
    status: str

    @property
    def skipped(self) -> bool:
        return self.status == EXTRACT_SKIPPED


class ArchiveReader:
    """Read-only view of an RGSSAD archive.

    Owns a single file handle for its lifetime. Not safe for concurrent use;
    parallel extraction needs one reader per worker.
    """

    def __init__(self, path: str, provider: Optional[EntryProvider] = None):
        self.path = path
        self.f: Optional[BinaryIO] = None
        self.provider = provider
        self.revision: int = REVISION_UNKNOWN
        self.size: int = 0
        self.entries: List[Entry] = []

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.f is not None:
            return
        self.f = open(self.path, "rb")
        try:
            self.size = stream_size(self.f)
            self.revision = resolve_revision(self.f, self.path)
            if self.revision == REVISION_UNKNOWN:
                raise InvalidArchive("Unsupported archive revision")
            provider = self.provider or provider_for_revision(self.revision)
            entries = provider.read_entries(self.f)
            for e in entries:
                if e.offset < 0 or e.length < 0 or e.offset + e.length > self.size:
                    raise CorruptArchive(
                        f"Entry {e.name!r} (offset {e.offset}, length {e.length}) exceeds archive size {self.size}"
                    )
            self.entries = list(entries)
        except BaseException:
            # Ensure file handle is closed on failure to avoid leaks
            self.close()
            raise

    def close(self):
        if self.f is not None:
            self.f.close()
            self.f = None

    @property
    def closed(self) -> bool:
        return self.f is None

    def list(self) -> List[Entry]:
        return self.entries

    def extract_all(self, output_dir: str, overwrite: bool = False, create_dirs: bool = True) -> List[ExtractResult]:
        """Extract every entry in table order, stopping at the first error."""
        return [self.extract_one(e, output_dir, overwrite=overwrite, create_dirs=create_dirs) for e in self.entries]

    def extract_one(self, entry: Entry, output_dir: str, overwrite: bool = False, create_dirs: bool = True) -> ExtractResult:
        if self.f is None:
            raise RuntimeError("Archive not open")
        out_path = resolve_output_path(output_dir, entry.name, create_dirs=create_dirs)
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        if os.path.exists(out_path) and not overwrite:
            return ExtractResult(entry=entry, path=out_path, status=EXTRACT_SKIPPED)
        if entry.offset + entry.length > stream_size(self.f):
            raise TruncatedArchive(f"Entry {entry.name!r} needs {entry.length} bytes at offset {entry.offset}")
        self.f.seek(entry.offset)
        cipher = KeystreamCipher(entry.key)
        remaining = entry.length
        try:
            with open(out_path, "wb") as wf:
                while remaining > 0:
                    data = self.f.read(min(EXTRACT_CHUNK_SIZE, remaining))
                    if not data:
                        raise TruncatedArchive(
                            f"Entry {entry.name!r} ended after {entry.length - remaining} of {entry.length} bytes"
                        )
                    wf.write(cipher.process(data))
                    remaining -= len(data)
        except BaseException:
            # never leave partial output behind
            try:
                os.remove(out_path)
            except FileNotFoundError:
                pass
            raise
        return ExtractResult(entry=entry, path=out_path, status=EXTRACT_WRITTEN)


def open_archive(path: str, provider: Optional[EntryProvider] = None) -> ArchiveReader:
    reader = ArchiveReader(path, provider=provider)
    reader.open()
    return reader


def extract_all(archive: ArchiveReader, output_dir: str, overwrite: bool = False) -> List[ExtractResult]:
    return archive.extract_all(output_dir, overwrite=overwrite)


def extract_one(
    archive: ArchiveReader, entry: Entry, output_dir: str, overwrite: bool = False, create_dirs: bool = True
) -> ExtractResult:
    return archive.extract_one(entry, output_dir, overwrite=overwrite, create_dirs=create_dirs)
