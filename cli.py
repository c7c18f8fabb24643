#!/usr/bin/env python3
"""Validate SIP preambles from the command line.

Prints one `path:line: message` line per diagnostic. Exit status is 0 when
every document is clean, 1 when any diagnostic was reported, 2 when a
given path does not exist.
"""

import argparse
import logging
import os
import sys

from config import SIP_DIR
from services.document import validate_document
from services.sips import iter_sip_files

log = logging.getLogger(__name__)


def collect_files(paths: list[str]) -> tuple[list[str], list[str]]:
    """Expand files and directories into .md files. Returns (files, missing)."""
    files, missing = [], []
    for path in paths:
        if os.path.isdir(path):
            files.extend(os.path.join(path, rel) for rel in iter_sip_files(path))
        elif os.path.isfile(path):
            files.append(path)
        else:
            missing.append(path)
    return files, missing


def validate_paths(paths: list[str], out=None) -> int:
    if out is None:
        out = sys.stdout
    files, missing = collect_files(paths)
    for path in missing:
        print(f"ERROR: no such file or directory: {path}", file=out)

    total = 0
    for path in files:
        log.debug("Validating %s", path)
        with open(path, encoding="utf-8") as f:
            content = f.read()
        for diagnostic in validate_document(content, path=path):
            print(diagnostic, file=out)
            total += 1

    print(f"{len(files)} file(s) checked, {total} problem(s)", file=out)
    if missing:
        return 2
    return 1 if total else 0


def main(argv=None):
    """Entry point for `sip-validate` CLI command."""
    parser = argparse.ArgumentParser(description="Validate SIP document preambles")
    parser.add_argument(
        "paths", nargs="*", help=f"Files or directories to check (default: {SIP_DIR})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    cli_args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if cli_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(validate_paths(cli_args.paths or [SIP_DIR]))


if __name__ == "__main__":
    main()
