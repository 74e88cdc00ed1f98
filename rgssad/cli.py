from __future__ import annotations

import argparse
import os
import sys
import time
import traceback
from typing import List

from rgssad.constants import ENGINE_NAMES
from rgssad.errors import RgssadError
from rgssad.probe import version_from_extension
from rgssad.reader import ArchiveReader


def write_error_log(exc: BaseException, log_dir: str = ".") -> str:
    """Write the traceback of an unexpected failure and return the log path."""
    os.makedirs(log_dir, exist_ok=True)
    stamp = time.strftime("%Y%m%d-%H%M%S")
    path = os.path.join(log_dir, f"rgssad-error-{stamp}.log")
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(f"rgssad {time.strftime('%Y-%m-%d %H:%M:%S')} argv={sys.argv!r}\n")
        fh.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        fh.write("\n")
    return path


def cmd_info(archive: str) -> bool:
    engine = version_from_extension(archive)
    with ArchiveReader(archive) as r:
        entries = r.list()
        total = sum(e.length for e in entries)
        print(f"Archive:  {archive}")
        print(f"Engine:   {ENGINE_NAMES[engine]} (by extension)")
        print(f"Revision: {r.revision}")
        print(f"Entries:  {len(entries)}")
        print(f"Payload:  {total} bytes")
    return True


def cmd_list(archive: str) -> bool:
    with ArchiveReader(archive) as r:
        for e in r.list():
            print(f"{e.length}\t0x{e.offset:08X}\t0x{e.key:08X}\t{e.name}")
    return True


def cmd_extract(archive: str, *, outdir: str = ".", overwrite: bool = False, flat: bool = False, quiet: bool = False) -> bool:
    """Extract every entry of an archive to a directory."""

    t0 = time.time()
    written = 0
    skipped = 0
    written_bytes = 0
    with ArchiveReader(archive) as r:
        entries = r.list()
        total = len(entries)
        for i, e in enumerate(entries, 1):
            res = r.extract_one(e, outdir, overwrite=overwrite, create_dirs=not flat)
            if res.skipped:
                skipped += 1
                print(f"    skipping: {e.name} (exists)")
                continue
            written += 1
            written_bytes += e.length
            if not quiet:
                print(f"  extracting: {i:>4}/{total:<4} {e.name}")
    dt = max(0.000001, time.time() - t0)
    mib = written_bytes / (1024.0 * 1024.0)
    print(f"Done: extracted {written}/{total} files ({mib:.2f} MiB) in {dt:.1f}s; skipped={skipped}")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="rgssad",
        description="Decrypt and extract RPG Maker XP/VX/VX Ace archives (.rgssad, .rgss2a, .rgss3a)",
    )
    ap.add_argument("--log-dir", default=".", help="Directory for error logs of unexpected failures (default: .)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_info = sub.add_parser("info", help="Show archive information")
    ap_info.add_argument("archive", help="Archive path")

    ap_list = sub.add_parser("list", help="List archive contents")
    ap_list.add_argument("archive", help="Archive path")

    ap_extract = sub.add_parser("extract", help="Extract all files")
    ap_extract.add_argument("archive", help="Archive path")
    ap_extract.add_argument("--outdir", default=".", help="Output directory")
    ap_extract.add_argument("--overwrite", action="store_true", help="Replace files that already exist")
    ap_extract.add_argument("--flat", action="store_true", help="Write every file directly into the output directory")
    ap_extract.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "info":
            cmd_info(args.archive)
        elif args.cmd == "list":
            cmd_list(args.archive)
        elif args.cmd == "extract":
            cmd_extract(args.archive, outdir=args.outdir, overwrite=args.overwrite, flat=args.flat, quiet=args.quiet)
        else:
            raise RuntimeError("Unknown command")
    except (RgssadError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        log_path = write_error_log(e, args.log_dir)
        print("Unexpected error happened while trying to extract the archive.", file=sys.stderr)
        print(f"Error log has been written to '{log_path}'", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
