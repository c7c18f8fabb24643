"""Validation endpoints: ad-hoc content, schema description, SIP directory."""

from flask import Blueprint, jsonify, request

from services.document import validate_document
from services.schema import (
    DATE_HEADERS,
    HEADER_OPTIONAL,
    HEADER_ORDER,
    HEADER_REQUIRED,
    VALID_CATEGORIES,
    VALID_STATUSES,
)
from services.sips import list_sips, validate_sip_file

bp = Blueprint("validate", __name__)


@bp.route("/api/validate", methods=["POST"])
def validate_content():
    """Validate posted document content without touching disk."""
    data = request.get_json(silent=True) or {}
    content = data.get("content", "")
    if not isinstance(content, str):
        return jsonify({"error": "content must be a string"}), 400

    diagnostics = validate_document(content, path=data.get("path"))
    return jsonify(
        {
            "ok": not diagnostics,
            "diagnostics": [d.to_dict() for d in diagnostics],
        }
    )


@bp.route("/api/validate/schema")
def schema():
    return jsonify(
        {
            "order": list(HEADER_ORDER),
            "required": list(HEADER_REQUIRED),
            "optional": list(HEADER_OPTIONAL),
            "dates": list(DATE_HEADERS),
            "statuses": sorted(VALID_STATUSES),
            "categories": sorted(VALID_CATEGORIES),
        }
    )


@bp.route("/api/sips")
def sips_index():
    """Every SIP in the configured directory with its diagnostic count."""
    result = list_sips()
    if "error" in result:
        return jsonify(result), 404
    return jsonify(result)


@bp.route("/api/sips/<path:rel_path>")
def sip_file(rel_path):
    """Diagnostics for one SIP file."""
    result = validate_sip_file(rel_path)
    if "error" in result:
        code = 404 if result["error"] == "File not found" else 400
        return jsonify(result), code
    return jsonify(result)
