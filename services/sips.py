"""SIP directory operations: list documents and validate them in place."""

import logging
import os

from config import SIP_DIR
from services.document import validate_document

log = logging.getLogger(__name__)


def _safe_path(rel_path: str, sip_dir: str = None) -> tuple[str, str | None]:
    """Resolve and validate that path stays within sip_dir. Returns (abs_path, error)."""
    sip_dir = sip_dir or SIP_DIR
    abs_path = os.path.realpath(os.path.join(sip_dir, rel_path))
    sip_real = os.path.realpath(sip_dir)
    if abs_path != sip_real and not abs_path.startswith(sip_real + os.sep):
        return abs_path, "Path traversal detected"
    return abs_path, None


def iter_sip_files(sip_dir: str) -> list[str]:
    """Relative paths of every .md file under sip_dir, skipping dot-directories."""
    found = []
    for root, dirs, files in os.walk(sip_dir):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        for fname in files:
            if not fname.endswith(".md"):
                continue
            rel_root = os.path.relpath(root, sip_dir)
            rel_path = (
                fname if rel_root == "." else os.path.join(rel_root, fname).replace(os.sep, "/")
            )
            found.append(rel_path)
    return sorted(found)


def validate_sip_file(rel_path: str, sip_dir: str = None) -> dict:
    """Validate one SIP file. Returns {path, ok, diagnostics} or {error}."""
    abs_path, err = _safe_path(rel_path, sip_dir)
    if err:
        return {"error": err}
    if not os.path.isfile(abs_path):
        return {"error": "File not found"}

    try:
        with open(abs_path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        return {"error": str(e)}

    diagnostics = validate_document(content, path=rel_path)
    return {
        "path": rel_path,
        "ok": not diagnostics,
        "diagnostics": [d.to_dict() for d in diagnostics],
    }


def list_sips(sip_dir: str = None) -> dict:
    """Every SIP under sip_dir with its diagnostic count. Returns {sips} or {error}."""
    sip_dir = sip_dir or SIP_DIR
    if not os.path.isdir(sip_dir):
        return {"error": "SIP directory not found"}

    sips = []
    for rel_path in iter_sip_files(sip_dir):
        result = validate_sip_file(rel_path, sip_dir)
        if "error" in result:
            log.warning("Skipping %s: %s", rel_path, result["error"])
            continue
        sips.append(
            {
                "path": rel_path,
                "ok": result["ok"],
                "diagnostic_count": len(result["diagnostics"]),
            }
        )
    return {"sips": sips}
